from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.deps import STAFF_ROLES, require_role
from app.core.responses import api_response
from app.db.session import get_db
from app.models.baptis import Baptis
from app.models.jemaat import Jemaat
from app.models.keluarga import Keluarga
from app.models.pernikahan import Pernikahan
from app.models.sidi import Sidi
from app.models.user import User
from app.services.filter_query import apply_parsed_query, paginate
from app.services.query_params import (
    PERNIKAHAN_FILTER_FIELDS,
    SACRAMENT_FILTER_FIELDS,
    parse_query_params,
    query_mapping,
    query_options,
)
from app.services.scope import apply_scope, scope_for_user
from app.services.serialize import list_payload, row_to_dict

baptis_router = APIRouter()
sidi_router = APIRouter()
pernikahan_router = APIRouter()

RAYON_PATH = ("jemaat", "keluarga", "id_rayon")
COUPLE_RAYON_PATH = ("jemaats", "keluarga", "id_rayon")


def _record_to_dict(row: Any) -> dict[str, Any]:
    jemaat = row.jemaat
    jemaat_payload = None
    if jemaat is not None:
        keluarga = jemaat.keluarga
        jemaat_payload = {
            "id": jemaat.id,
            "nama": jemaat.nama,
            "jenis_kelamin": jemaat.jenis_kelamin,
            "tanggal_lahir": jemaat.tanggal_lahir.isoformat() if jemaat.tanggal_lahir else None,
            "keluarga": {
                "no_bagungan": keluarga.no_bagungan,
                "rayon": {"nama_rayon": keluarga.rayon.nama_rayon} if keluarga.rayon is not None else None,
            }
            if keluarga is not None
            else None,
        }
    return row_to_dict(row, jemaat=jemaat_payload)


def _list_records(model, request: Request, db: Session, user: User) -> dict[str, Any]:
    parsed = parse_query_params(
        query_mapping(request.query_params),
        query_options(search_field="jemaat.nama", default_sort_by="tanggal", default_sort_order="desc"),
        fields=SACRAMENT_FILTER_FIELDS,
    )
    parsed = apply_scope(parsed, scope_for_user(user, RAYON_PATH))
    q = db.query(model).options(joinedload(model.jemaat).joinedload(Jemaat.keluarga).joinedload(Keluarga.rayon))
    rows, total = paginate(apply_parsed_query(q, model, parsed), parsed)
    return api_response(True, list_payload([_record_to_dict(r) for r in rows], parsed, total), "Data berhasil diambil")


@baptis_router.get("")
def list_baptis(request: Request, db: Session = Depends(get_db), user: User = Depends(require_role(*STAFF_ROLES))):
    return _list_records(Baptis, request, db, user)


@sidi_router.get("")
def list_sidi(request: Request, db: Session = Depends(get_db), user: User = Depends(require_role(*STAFF_ROLES))):
    return _list_records(Sidi, request, db, user)


def _pernikahan_to_dict(row: Pernikahan) -> dict[str, Any]:
    jemaats = [
        {"id": j.id, "nama": j.nama, "jenis_kelamin": j.jenis_kelamin}
        for j in sorted(row.jemaats, key=lambda j: (j.nama or "", j.id))
    ]
    return row_to_dict(row, jemaats=jemaats)


@pernikahan_router.get("")
def list_pernikahan(request: Request, db: Session = Depends(get_db), user: User = Depends(require_role(*STAFF_ROLES))):
    """Marriages, newest first. ``search`` matches the name of either spouse."""
    parsed = parse_query_params(
        query_mapping(request.query_params),
        query_options(search_field="jemaats.nama", default_sort_by="tanggal", default_sort_order="desc", default_limit=10),
        fields=PERNIKAHAN_FILTER_FIELDS,
    )
    parsed = apply_scope(parsed, scope_for_user(user, COUPLE_RAYON_PATH))
    q = db.query(Pernikahan).options(selectinload(Pernikahan.jemaats))
    rows, total = paginate(apply_parsed_query(q, Pernikahan, parsed), parsed)
    return api_response(True, list_payload([_pernikahan_to_dict(r) for r in rows], parsed, total), "Data berhasil diambil")

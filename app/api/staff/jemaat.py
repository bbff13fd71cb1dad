from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session, joinedload

from app.core.deps import STAFF_ROLES, require_role
from app.core.responses import api_response
from app.db.session import get_db
from app.models.jemaat import Jemaat
from app.models.keluarga import Keluarga
from app.models.user import User
from app.services.filter_query import apply_parsed_query, paginate
from app.services.query_params import JEMAAT_FILTER_FIELDS, parse_query_params, query_mapping, query_options
from app.services.scope import apply_scope, ensure_in_scope, scope_for_user
from app.services.serialize import list_payload, row_to_dict

router = APIRouter()

RAYON_PATH = ("keluarga", "id_rayon")


def _keluarga_dict(keluarga: Keluarga | None) -> dict[str, Any] | None:
    if keluarga is None:
        return None
    return row_to_dict(keluarga, alamat=row_to_dict(keluarga.alamat), rayon=row_to_dict(keluarga.rayon))


def jemaat_to_dict(row: Jemaat) -> dict[str, Any]:
    user = row.user
    return row_to_dict(
        row,
        keluarga=_keluarga_dict(row.keluarga),
        user={"id": user.id, "username": user.username, "role": user.role} if user is not None else None,
    )


def _jemaat_query(db: Session):
    return db.query(Jemaat).options(
        joinedload(Jemaat.keluarga).joinedload(Keluarga.alamat),
        joinedload(Jemaat.keluarga).joinedload(Keluarga.rayon),
        joinedload(Jemaat.user),
    )


@router.get("")
def list_jemaat(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(*STAFF_ROLES)),
):
    parsed = parse_query_params(
        query_mapping(request.query_params),
        query_options(search_field="nama", default_sort_by="nama"),
        fields=JEMAAT_FILTER_FIELDS,
    )
    parsed = apply_scope(parsed, scope_for_user(user, RAYON_PATH))
    rows, total = paginate(apply_parsed_query(_jemaat_query(db), Jemaat, parsed), parsed)
    return api_response(True, list_payload([jemaat_to_dict(r) for r in rows], parsed, total), "Data berhasil diambil")


@router.get("/{jemaat_id}")
def get_jemaat(
    jemaat_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(*STAFF_ROLES)),
):
    row = _jemaat_query(db).filter(Jemaat.id == jemaat_id).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Jemaat tidak ditemukan")
    rayon_id = row.keluarga.id_rayon if row.keluarga is not None else None
    ensure_in_scope(scope_for_user(user, RAYON_PATH), rayon_id)
    return api_response(True, jemaat_to_dict(row), "Data berhasil diambil")

import re

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.responses import api_response
from app.db.session import get_db
from app.models.keluarga import Keluarga
from app.models.rayon import Rayon
from app.services.filter_query import apply_parsed_query
from app.services.query_params import parse_query_params, query_mapping, query_options
from app.services.serialize import list_payload

router = APIRouter()

_DIGITS_RE = re.compile(r"\d+")


def _rayon_number(name: str | None) -> int:
    # "Rayon 10" sorts after "Rayon 9".
    match = _DIGITS_RE.search(name or "")
    return int(match.group(0)) if match else 0


@router.get("")
def list_rayon(request: Request, db: Session = Depends(get_db)):
    parsed = parse_query_params(
        query_mapping(request.query_params),
        query_options(search_field="nama_rayon", default_sort_by="nama_rayon"),
        fields=(),
    )
    rows = apply_parsed_query(db.query(Rayon), Rayon, parsed).all()
    if parsed.sort.sort_by in {"nama_rayon", "namaRayon"}:
        rows.sort(key=lambda r: _rayon_number(r.nama_rayon), reverse=parsed.sort.sort_order == "desc")

    page = parsed.pagination
    page_rows = rows[page.skip : page.skip + page.limit]
    counts = dict(
        db.query(Keluarga.id_rayon, func.count(Keluarga.id))
        .filter(Keluarga.id_rayon.in_([r.id for r in page_rows]))
        .group_by(Keluarga.id_rayon)
        .all()
    )
    items = [{"id": r.id, "nama_rayon": r.nama_rayon, "jumlah_keluarga": int(counts.get(r.id, 0))} for r in page_rows]
    return api_response(True, list_payload(items, parsed, len(rows)), "Data berhasil diambil")

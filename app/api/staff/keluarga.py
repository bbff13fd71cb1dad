from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session, joinedload

from app.core.deps import STAFF_ROLES, require_role
from app.core.responses import api_response
from app.db.session import get_db
from app.models.keluarga import Keluarga
from app.models.user import User
from app.services.filter_query import apply_parsed_query, paginate
from app.services.query_params import KELUARGA_FILTER_FIELDS, parse_query_params, query_mapping, query_options
from app.services.scope import apply_scope, scope_for_user
from app.services.serialize import list_payload, row_to_dict

router = APIRouter()


@router.get("")
def list_keluarga(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(*STAFF_ROLES)),
):
    parsed = parse_query_params(
        query_mapping(request.query_params),
        query_options(search_field="no_kk", default_sort_by="no_bagungan", default_limit=10),
        fields=KELUARGA_FILTER_FIELDS,
    )
    parsed = apply_scope(parsed, scope_for_user(user, "id_rayon"))
    q = db.query(Keluarga).options(joinedload(Keluarga.alamat), joinedload(Keluarga.rayon))
    rows, total = paginate(apply_parsed_query(q, Keluarga, parsed), parsed)
    items = [row_to_dict(r, alamat=row_to_dict(r.alamat), rayon=row_to_dict(r.rayon)) for r in rows]
    return api_response(True, list_payload(items, parsed, total), "Data berhasil diambil")

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.inspection import inspect as sa_inspect

from app.schemas.query import ParsedQuery
from app.services.filter_query import page_meta

HIDDEN_FIELDS = {"password_hash"}


def serialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: serialize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    return value


def row_to_dict(row: Any, **relations: Any) -> dict[str, Any] | None:
    """Column values of ``row`` plus already-serialized ``relations`` merged on top."""
    if row is None:
        return None
    mapper = sa_inspect(type(row))
    payload = {
        attr.key: serialize_value(getattr(row, attr.key))
        for attr in mapper.column_attrs
        if attr.key not in HIDDEN_FIELDS
    }
    payload.update(relations)
    return payload


def list_payload(items: list[dict[str, Any]], parsed: ParsedQuery, total: int) -> dict[str, Any]:
    return {"items": items, "pagination": page_meta(parsed, total).model_dump()}

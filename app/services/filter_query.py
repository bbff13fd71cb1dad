from __future__ import annotations

import logging
import math
from typing import Any

from sqlalchemy import and_, asc, desc
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import Query

from app.schemas.query import PageMeta, ParsedQuery

_LOG = logging.getLogger("app.query")

_RELATION_FLAGS = {"is", "is_not"}


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_snake(name: str) -> str:
    raw = (name or "").strip().replace("-", "_")
    chars: list[str] = []
    for index, ch in enumerate(raw):
        if ch.isupper() and index > 0 and raw[index - 1].isalnum() and raw[index - 1] != "_":
            chars.append("_")
        chars.append(ch.lower())
    return "".join(chars)


def _leaf_clauses(column, value) -> list:
    if not isinstance(value, dict):
        return [column == value]
    clauses = []
    if "in" in value:
        clauses.append(column.in_(list(value["in"] or [])))
    if value.get("gte") is not None:
        clauses.append(column >= value["gte"])
    if value.get("lte") is not None:
        clauses.append(column <= value["lte"])
    if value.get("contains") is not None:
        pattern = f"%{_escape_like(str(value['contains']))}%"
        if str(value.get("mode") or "").lower() == "insensitive":
            clauses.append(column.ilike(pattern, escape="\\"))
        else:
            clauses.append(column.like(pattern, escape="\\"))
    return clauses


def _relation_clauses(attr, prop, value) -> list:
    exists = attr.any if prop.uselist else attr.has
    if value is None:
        return [~exists()]
    if not isinstance(value, dict):
        _LOG.debug("relation filter %s ignored: %r", prop.key, value)
        return []
    clauses = []
    if "is" in value:
        clauses.append(~exists())
    if "is_not" in value:
        clauses.append(exists())
    nested = {k: v for k, v in value.items() if k not in _RELATION_FLAGS}
    if nested:
        inner = _tree_clauses(prop.mapper.class_, nested)
        if inner:
            clauses.append(exists(and_(*inner)))
    return clauses


def _tree_clauses(model, tree: dict[str, Any]) -> list:
    mapper = sa_inspect(model)
    clauses = []
    for key, value in tree.items():
        if key in mapper.relationships:
            clauses.extend(_relation_clauses(getattr(model, key), mapper.relationships[key], value))
        elif key in mapper.column_attrs:
            clauses.extend(_leaf_clauses(getattr(model, key), value))
        else:
            _LOG.debug("filter key %s is not a field of %s", key, model.__name__)
    return clauses


def _sort_column(model, sort_by: str):
    mapper = sa_inspect(model)
    for candidate in (sort_by, _to_snake(sort_by)):
        if candidate in mapper.column_attrs:
            return getattr(model, candidate)
    _LOG.debug("sort field %s is not a field of %s; using primary key", sort_by, model.__name__)
    return mapper.primary_key[0]


def apply_parsed_query(q: Query, model, parsed: ParsedQuery) -> Query:
    clauses = _tree_clauses(model, parsed.filter)
    if clauses:
        q = q.filter(and_(*clauses))
    column = _sort_column(model, parsed.sort.sort_by)
    return q.order_by(asc(column) if parsed.sort.sort_order == "asc" else desc(column))


def paginate(q: Query, parsed: ParsedQuery) -> tuple[list, int]:
    total = q.order_by(None).count()
    rows = q.offset(parsed.pagination.skip).limit(parsed.pagination.limit).all()
    return rows, total


def page_meta(parsed: ParsedQuery, total: int) -> PageMeta:
    page = parsed.pagination
    total_pages = math.ceil(total / page.limit) if total else 0
    return PageMeta(
        page=page.page,
        limit=page.limit,
        skip=page.skip,
        total=total,
        totalPages=total_pages,
        hasNext=page.page < total_pages,
        hasPrev=page.page > 1,
    )

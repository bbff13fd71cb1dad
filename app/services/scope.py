from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException

from app.schemas.query import ParsedQuery

ROLE_MAJELIS = "MAJELIS"


@dataclass(frozen=True)
class ScopeConstraint:
    """Equality constraint a caller's role imposes on every query it runs."""

    path: tuple[str, ...]
    value: str


def _as_path(path: str | tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(path, str):
        return tuple(path.split("."))
    return tuple(path)


def _user_rayon_id(user: Any) -> str | None:
    if user is None:
        return None
    role = str(getattr(user, "role", "") or "").upper()
    if role != ROLE_MAJELIS:
        return None
    majelis = getattr(user, "majelis", None)
    rayon_id = str(getattr(majelis, "id_rayon", "") or "").strip() if majelis is not None else ""
    return rayon_id or None


def scope_for_user(user: Any, path: str | tuple[str, ...]) -> ScopeConstraint | None:
    """Majelis users see only their own rayon; every other role is unscoped.

    ``path`` points from the queried entity to its rayon id column.
    """
    rayon_id = _user_rayon_id(user)
    if rayon_id is None:
        return None
    return ScopeConstraint(path=_as_path(path), value=rayon_id)


def _intersect(existing: Any, value: str) -> Any:
    if existing is None:
        return value
    if isinstance(existing, dict):
        members = existing.get("in")
        if set(existing) == {"in"} and isinstance(members, list) and value in members:
            return value
        return {"in": []}
    if existing == value:
        return value
    return {"in": []}


def apply_scope(parsed: ParsedQuery, scope: ScopeConstraint | None) -> ParsedQuery:
    """Return ``parsed`` with its filter narrowed to ``scope``.

    A request filter that already names a different rayon collapses to an empty
    membership so the query matches nothing, never widens past the scope.
    """
    if scope is None:
        return parsed
    tree = copy.deepcopy(parsed.filter)
    node = tree
    for key in scope.path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    leaf = scope.path[-1]
    node[leaf] = _intersect(node.get(leaf), scope.value)
    return parsed.model_copy(update={"filter": tree})


def ensure_in_scope(scope: ScopeConstraint | None, rayon_id: str | None) -> None:
    if scope is None:
        return
    if str(rayon_id or "").strip() != scope.value:
        raise HTTPException(status_code=403, detail="Anda hanya dapat mengakses data dalam rayon yang Anda kelola")

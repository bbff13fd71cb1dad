from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Union

from app.core.config import settings
from app.schemas.query import Pagination, ParsedQuery, QueryOptions, SortSpec

_LOG = logging.getLogger("app.query")

QueryValue = Union[str, list[str], None]

KIND_VALUE = "value"
KIND_BOOLEAN = "boolean"
KIND_INTEGER = "integer"
KIND_DATE_FROM = "date_from"
KIND_DATE_TO = "date_to"
KIND_AGE_MIN = "age_min"
KIND_AGE_MAX = "age_max"
KIND_RELATION_EXISTS = "relation_exists"

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_TRUE_VALUES = {"1", "true", "yes", "y", "ya"}
_FALSE_VALUES = {"0", "false", "no", "n", "tidak"}
_SORT_ORDERS = {"asc", "desc"}
# Largest OFFSET a BIGINT column accepts.
_MAX_SKIP = 2**63 - 1


@dataclass(frozen=True)
class FilterField:
    """One recognised query-string key and where its value lands in the filter tree."""

    query_key: str
    path: tuple[str, ...]
    kind: str = KIND_VALUE


def _field(query_key: str, path: str, kind: str = KIND_VALUE) -> FilterField:
    return FilterField(query_key=query_key, path=tuple(path.split(".")), kind=kind)


JEMAAT_FILTER_FIELDS: tuple[FilterField, ...] = (
    _field("jenisKelamin", "jenis_kelamin", KIND_BOOLEAN),
    _field("status", "status"),
    _field("golonganDarah", "golongan_darah"),
    _field("tanggalLahirFrom", "tanggal_lahir", KIND_DATE_FROM),
    _field("tanggalLahirTo", "tanggal_lahir", KIND_DATE_TO),
    _field("idSuku", "id_suku"),
    _field("idPendidikan", "id_pendidikan"),
    _field("idPekerjaan", "id_pekerjaan"),
    _field("idPendapatan", "id_pendapatan"),
    _field("idJaminanKesehatan", "id_jaminan_kesehatan"),
    _field("idStatusDalamKeluarga", "id_status_dalam_keluarga"),
    _field("idKeluarga", "id_keluarga"),
    _field("idRayon", "keluarga.id_rayon"),
    _field("idStatusKeluarga", "keluarga.id_status_keluarga"),
    _field("idKeadaanRumah", "keluarga.id_keadaan_rumah"),
    _field("idStatusKepemilikanRumah", "keluarga.id_status_kepemilikan_rumah"),
    _field("idKelurahan", "keluarga.alamat.id_kelurahan"),
    _field("rt", "keluarga.alamat.rt", KIND_INTEGER),
    _field("rw", "keluarga.alamat.rw", KIND_INTEGER),
    _field("hasUserAccount", "user", KIND_RELATION_EXISTS),
    _field("userRole", "user.role"),
    _field("ageMax", "tanggal_lahir", KIND_AGE_MAX),
    _field("ageMin", "tanggal_lahir", KIND_AGE_MIN),
)

KELUARGA_FILTER_FIELDS: tuple[FilterField, ...] = (
    _field("idRayon", "id_rayon"),
    _field("idStatusKeluarga", "id_status_keluarga"),
    _field("idKeadaanRumah", "id_keadaan_rumah"),
    _field("idStatusKepemilikanRumah", "id_status_kepemilikan_rumah"),
    _field("idKelurahan", "alamat.id_kelurahan"),
    _field("rt", "alamat.rt", KIND_INTEGER),
    _field("rw", "alamat.rw", KIND_INTEGER),
)

# Baptis and sidi share one shape: a dated record attached to a jemaat.
SACRAMENT_FILTER_FIELDS: tuple[FilterField, ...] = (
    _field("tanggalFrom", "tanggal", KIND_DATE_FROM),
    _field("tanggalTo", "tanggal", KIND_DATE_TO),
    _field("idKlasis", "id_klasis"),
    _field("idJemaat", "id_jemaat"),
    _field("jenisKelamin", "jemaat.jenis_kelamin", KIND_BOOLEAN),
    _field("idRayon", "jemaat.keluarga.id_rayon"),
)

PERNIKAHAN_FILTER_FIELDS: tuple[FilterField, ...] = (
    _field("tanggalFrom", "tanggal", KIND_DATE_FROM),
    _field("tanggalTo", "tanggal", KIND_DATE_TO),
    _field("idKlasis", "id_klasis"),
    _field("idJemaat", "jemaats.id"),
    _field("idRayon", "jemaats.keluarga.id_rayon"),
)


class FilterTree:
    """Accumulates filter constraints into one nested dict.

    Every write walks (and creates) the branch for its path, so constraints on
    sibling keys of the same relation never replace each other.
    """

    def __init__(self) -> None:
        self._root: dict[str, Any] = {}

    def _branch(self, path: Iterable[str]) -> dict[str, Any]:
        node = self._root
        for key in path:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        return node

    def set(self, path: tuple[str, ...], value: Any) -> None:
        self._branch(path[:-1])[path[-1]] = value

    def bound(self, path: tuple[str, ...], op: str, value: Any) -> None:
        node = self._branch(path)
        current = node.get(op)
        if current is not None:
            # Two lower (or upper) bounds on one field intersect to the tighter one.
            value = max(current, value) if op == "gte" else min(current, value)
        node[op] = value

    def flag(self, path: tuple[str, ...], op: str) -> None:
        self._branch(path)[op] = None

    def build(self) -> dict[str, Any]:
        return copy.deepcopy(self._root)


def query_options(**overrides: Any) -> QueryOptions:
    values: dict[str, Any] = {
        "default_limit": settings.QUERY_DEFAULT_LIMIT,
        "default_page": settings.QUERY_DEFAULT_PAGE,
        "max_limit": settings.QUERY_MAX_LIMIT,
    }
    values.update(overrides)
    return QueryOptions(**values)


def query_mapping(params: Any) -> dict[str, QueryValue]:
    """Flatten a Starlette ``QueryParams`` into ``key -> str | list[str]``.

    Repeated keys and ``key[]`` keys become lists.
    """
    result: dict[str, QueryValue] = {}
    for key in params.keys():
        values = [str(v) for v in params.getlist(key)]
        if key.endswith("[]"):
            name = key[:-2]
            existing = result.get(name)
            merged = existing if isinstance(existing, list) else ([existing] if existing is not None else [])
            result[name] = merged + values
            continue
        result[key] = values[0] if len(values) == 1 else values
    return result


def _scalar(raw: QueryValue) -> str | None:
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    return text or None


def _parse_int(raw: QueryValue) -> int | None:
    text = _scalar(raw)
    if text is None:
        return None
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    return int(match.group(1))


def _parse_positive_int(raw: QueryValue, default: int) -> int:
    value = _parse_int(raw)
    if value is None or value < 1:
        return default
    return value


def _parse_bool(raw: QueryValue) -> bool | None:
    text = _scalar(raw)
    if text is None:
        return None
    lowered = text.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def _parse_date(raw: QueryValue) -> date | None:
    text = _scalar(raw)
    if text is None:
        return None
    try:
        # Accept either YYYY-MM-DD or full ISO datetime and take its date part.
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


def _value_predicate(raw: QueryValue) -> Any:
    if isinstance(raw, list):
        values = [str(v).strip() for v in raw if str(v).strip()]
        if not values:
            return None
        return {"in": values}
    return _scalar(raw)


def _birth_date_bound(today: date, years: int, *, upper: bool) -> date | None:
    try:
        if upper:
            return date(today.year - years, 12, 31)
        return date(today.year - years, 1, 1)
    except ValueError:
        return None


def _apply_field(tree: FilterTree, field: FilterField, raw: QueryValue, today: date) -> bool:
    kind = field.kind
    if kind == KIND_VALUE:
        value = _value_predicate(raw)
        if value is None:
            return False
        tree.set(field.path, value)
        return True
    if kind == KIND_BOOLEAN:
        flag = _parse_bool(raw)
        if flag is None:
            return False
        tree.set(field.path, flag)
        return True
    if kind == KIND_INTEGER:
        number = _parse_int(raw)
        if number is None:
            return False
        tree.set(field.path, number)
        return True
    if kind in {KIND_DATE_FROM, KIND_DATE_TO}:
        day = _parse_date(raw)
        if day is None:
            return False
        tree.bound(field.path, "gte" if kind == KIND_DATE_FROM else "lte", day)
        return True
    if kind in {KIND_AGE_MIN, KIND_AGE_MAX}:
        years = _parse_int(raw)
        if years is None or years < 0:
            return False
        # Calendar-year granularity: ageMax bounds the oldest birth year, ageMin the youngest.
        if kind == KIND_AGE_MAX:
            day = _birth_date_bound(today, years, upper=False)
            op = "gte"
        else:
            day = _birth_date_bound(today, years, upper=True)
            op = "lte"
        if day is None:
            return False
        tree.bound(field.path, op, day)
        return True
    if kind == KIND_RELATION_EXISTS:
        flag = _parse_bool(raw)
        if flag is None:
            return False
        tree.flag(field.path, "is_not" if flag else "is")
        return True
    return False


def parse_query_params(
    query: Mapping[str, QueryValue],
    options: QueryOptions | None = None,
    *,
    fields: Iterable[FilterField] = JEMAAT_FILTER_FIELDS,
    today: date | None = None,
) -> ParsedQuery:
    """Translate raw query-string values into pagination, sort and a filter tree.

    Never raises: malformed page/limit fall back to the defaults and malformed
    filter values are left out of the tree.
    """
    opts = options or query_options()
    today = today or date.today()

    page = _parse_positive_int(query.get("page"), opts.default_page)
    limit = min(_parse_positive_int(query.get("limit"), opts.default_limit), opts.max_limit)
    if (page - 1) * limit > _MAX_SKIP:
        _LOG.debug("query page %s out of range; using default", page)
        page = opts.default_page
    pagination = Pagination(page=page, limit=limit, skip=(page - 1) * limit)

    sort_by = _scalar(query.get("sortBy")) or opts.default_sort_by
    sort_order = (_scalar(query.get("sortOrder")) or "").lower()
    if sort_order not in _SORT_ORDERS:
        sort_order = opts.default_sort_order
    sort = SortSpec(sort_by=sort_by, sort_order=sort_order)

    tree = FilterTree()
    search = query.get("search")
    if isinstance(search, str) and search:
        tree.set(tuple(opts.search_field.split(".")), {"contains": search, "mode": "insensitive"})

    for field in fields:
        raw = query.get(field.query_key)
        if raw is None:
            continue
        if not _apply_field(tree, field, raw, today):
            _LOG.debug("query filter %s ignored: %r", field.query_key, raw)

    return ParsedQuery(pagination=pagination, sort=sort, filter=tree.build())

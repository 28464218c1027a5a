"""List Query Features — filter, sort, projection and pagination from query strings.

Invariants:
    - Reserved keys (page, limit, sort, fields) are never treated as filters
    - Every field name is checked against the caller's allow-list
    - Pure: no IO, no SQLAlchemy — the service layer translates ListQuery to SQL

Design Decisions:
    - key[op]=value bracket syntax for comparisons (gte, gt, lte, lt):
      same shape clients already send to query-string driven APIs
    - Invalid page/limit fall back to defaults instead of failing: a typo in
      pagination should still return data
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from bookstore.core.errors import BadRequestError

RESERVED_KEYS = frozenset({"page", "limit", "sort", "fields"})
OPERATORS = frozenset({"eq", "gte", "gt", "lte", "lt"})
DEFAULT_SORT = "-created_at"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100

_FILTER_KEY = re.compile(r"^(?P<field>\w+)(?:\[(?P<op>\w+)\])?$")


@dataclass(frozen=True)
class FilterClause:
    field: str
    op: str
    value: str


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class ListQuery:
    """Parsed list request, ready to be applied to a query."""
    filters: list[FilterClause] = field(default_factory=list)
    sort: list[SortKey] = field(default_factory=list)
    fields: list[str] | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_list_query(
    params: Mapping[str, str],
    allowed_fields: set[str] | frozenset[str],
    filterable_fields: set[str] | frozenset[str] | None = None,
) -> ListQuery:
    """Parse raw query parameters into a ListQuery.

    filterable_fields narrows which fields may appear as filters; it
    defaults to allowed_fields.
    """
    return ListQuery(
        filters=_parse_filters(params, filterable_fields or allowed_fields),
        sort=_parse_sort(params.get("sort") or DEFAULT_SORT, allowed_fields),
        fields=_parse_fields(params.get("fields"), allowed_fields),
        page=_positive_int(params.get("page"), DEFAULT_PAGE),
        limit=_positive_int(params.get("limit"), DEFAULT_LIMIT),
    )


def project(record: dict[str, Any], fields: list[str] | None) -> dict[str, Any]:
    """Keep only the requested fields (plus id)."""
    if fields is None:
        return record
    return {k: v for k, v in record.items() if k == "id" or k in fields}


def _parse_filters(
    params: Mapping[str, str], allowed: set[str] | frozenset[str],
) -> list[FilterClause]:
    clauses = []
    for key, value in params.items():
        if key in RESERVED_KEYS:
            continue
        match = _FILTER_KEY.match(key)
        if not match:
            raise BadRequestError(f"Invalid filter: {key}")
        name, op = match.group("field"), match.group("op") or "eq"
        _check_field(name, allowed, "filter field")
        if op not in OPERATORS:
            raise BadRequestError(f"Invalid filter operator: {op}")
        clauses.append(FilterClause(name, op, value))
    return clauses


def _parse_sort(raw: str, allowed: set[str] | frozenset[str]) -> list[SortKey]:
    keys = []
    for part in _split_csv(raw):
        descending = part.startswith("-")
        name = part.lstrip("-")
        _check_field(name, allowed, "sort field")
        keys.append(SortKey(name, descending))
    return keys


def _parse_fields(
    raw: str | None, allowed: set[str] | frozenset[str],
) -> list[str] | None:
    if not raw:
        return None
    names = _split_csv(raw)
    if not names:
        return None
    for name in names:
        _check_field(name, allowed, "field")
    return names


def _check_field(name: str, allowed: set[str] | frozenset[str], kind: str) -> None:
    if name not in allowed:
        raise BadRequestError(f"Invalid {kind}: {name}")


def _split_csv(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default

"""
Generic list query engine.

Every list endpoint in the API accepts the same family of query
parameters (``page``, ``limit``, ``search``, per-resource field
filters, ``startDate``/``endDate`` and ``sortBy``/``order``).  Rather
than re-implementing the filtering and pagination in each handler, a
resource declares a :class:`ResourceQuerySpec` and the handler calls
:func:`run_list_query` with a snapshot of the collection.

The engine is pure: it never mutates the records it receives and
returns the same :class:`Page` for the same input.  The stages run in
a fixed order and each one can only narrow the candidate set::

    copy -> exact filters -> substring filters -> date range
         -> search -> total -> sort -> slice
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, time, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import InvalidQueryError


_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ResourceQuerySpec:
    """Declarative description of how a resource can be queried.

    Attributes
    ----------
    name : str
        Resource name, used in log and error messages.
    timestamp_field : str
        Record field holding an ISO 8601 timestamp for date range filters.
    search_fields : tuple
        Fields matched by the free-text ``search`` parameter.
    filters : dict
        Query parameter name -> record field, matched by equality.
    contains_filters : dict
        Query parameter name -> record field, matched as a
        case-insensitive substring.
    default_limit, max_limit : int
        Page size used when ``limit`` is absent, and its upper bound.
    sort_fields : tuple
        Fields accepted by ``sortBy``.
    default_sort, default_order : str
        Sort applied when ``sortBy`` is absent.  ``None`` keeps the
        collection order.
    wildcard_values : frozenset
        Filter values meaning "do not filter" (e.g. ``all``).
    """

    name: str
    timestamp_field: str
    search_fields: Tuple[str, ...] = ()
    filters: Mapping[str, str] = field(default_factory=dict)
    contains_filters: Mapping[str, str] = field(default_factory=dict)
    default_limit: int = 10
    max_limit: int = 500
    sort_fields: Tuple[str, ...] = ()
    default_sort: Optional[str] = None
    default_order: str = "asc"
    wildcard_values: frozenset = frozenset()


@dataclass
class ListQuery:
    """A parsed list query, ready to run against a collection."""

    page: int = 1
    limit: int = 10
    search: str = ""
    filters: Dict[str, str] = field(default_factory=dict)
    contains: Dict[str, str] = field(default_factory=dict)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort_by: Optional[str] = None
    order: str = "asc"
    timestamp_field: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        spec: ResourceQuerySpec,
        params: Mapping[str, Any],
        max_limit: Optional[int] = None,
    ) -> "ListQuery":
        """Build a query from raw request parameters.

        ``page`` and ``limit`` values that are missing use the defaults;
        non-numeric or non-positive values are clamped to 1.  Dates that
        cannot be parsed raise :class:`InvalidQueryError`.
        """
        upper = min(spec.max_limit, max_limit) if max_limit else spec.max_limit
        limit = min(_positive_int(params.get("limit"), spec.default_limit), upper)

        filters = {}
        for param in spec.filters:
            value = params.get(param)
            if value not in (None, "") and value not in spec.wildcard_values:
                filters[param] = str(value)
        contains = {}
        for param in spec.contains_filters:
            value = params.get(param)
            if value not in (None, ""):
                contains[param] = str(value)

        sort_by = params.get("sortBy") or spec.default_sort
        if sort_by not in spec.sort_fields and sort_by != spec.default_sort:
            sort_by = spec.default_sort
        order = str(params.get("order") or spec.default_order).lower()
        if order not in {"asc", "desc"}:
            order = spec.default_order

        return cls(
            page=_positive_int(params.get("page"), 1),
            limit=limit,
            search=str(params.get("search") or ""),
            filters=filters,
            contains=contains,
            start_date=parse_date_bound(params.get("startDate"), "startDate"),
            end_date=parse_date_bound(params.get("endDate"), "endDate", end_of_day=True),
            sort_by=sort_by,
            order=order,
            timestamp_field=spec.timestamp_field,
        )


@dataclass
class Page:
    """One page of results plus pagination metadata."""

    items: List[Dict[str, Any]]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def _positive_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return max(number, 1)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 string into an aware UTC datetime, or ``None``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date_bound(value: Any, param: str, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a ``startDate``/``endDate`` parameter.

    A bare calendar date covers the whole day: as a start bound it
    means midnight, as an end bound the last instant of that day.
    """
    if value is None or value == "":
        return None
    text = str(value).strip()
    if _DATE_ONLY.match(text):
        try:
            day = datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            raise InvalidQueryError(f"Invalid {param}: {text!r} is not a valid date")
        return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=timezone.utc)
    parsed = parse_timestamp(text)
    if parsed is None:
        raise InvalidQueryError(f"Invalid {param}: {text!r} is not a valid date")
    return parsed


def lookup(record: Mapping[str, Any], path: str) -> Any:
    """Return ``record[path]``, following dotted paths into nested mappings."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _equals(value: Any, wanted: str) -> bool:
    if value is None:
        return False
    return _as_text(value) == wanted


def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    return needle in _as_text(value).lower()


def _sort(
    records: List[Dict[str, Any]],
    field_name: str,
    descending: bool,
    chronological: bool = False,
) -> List[Dict[str, Any]]:
    """Stable sort on ``field_name``; records without a value go last.

    Timestamps are compared as instants, so ``...:00Z`` and
    ``...:00.123+00:00`` order correctly.
    """
    if chronological:
        def key(record):
            return parse_timestamp(lookup(record, field_name))
    else:
        def key(record):
            return lookup(record, field_name)
    present = [r for r in records if key(r) is not None]
    missing = [r for r in records if key(r) is None]
    present.sort(key=key, reverse=descending)
    return present + missing


def select_records(
    records: Iterable[Mapping[str, Any]],
    spec: ResourceQuerySpec,
    query: ListQuery,
) -> List[Dict[str, Any]]:
    """Return copies of the records matching every filter of ``query``.

    ``records`` is copied before any stage runs, so callers can pass
    the live collection of a repository.
    """
    result = [dict(record) for record in records]

    for param, wanted in query.filters.items():
        field_name = spec.filters[param]
        result = [r for r in result if _equals(lookup(r, field_name), wanted)]

    for param, needle in query.contains.items():
        field_name = spec.contains_filters[param]
        needle = needle.lower()
        result = [r for r in result if _contains(lookup(r, field_name), needle)]

    if query.start_date is not None or query.end_date is not None:
        bounded = []
        for record in result:
            stamp = parse_timestamp(lookup(record, spec.timestamp_field))
            if stamp is None:
                continue
            if query.start_date is not None and stamp < query.start_date:
                continue
            if query.end_date is not None and stamp > query.end_date:
                continue
            bounded.append(record)
        result = bounded

    if query.search:
        needle = query.search.lower()
        result = [
            r for r in result
            if any(_contains(lookup(r, f), needle) for f in spec.search_fields)
        ]
    return result


def paginate(matched: List[Dict[str, Any]], query: ListQuery) -> Page:
    """Sort the already filtered ``matched`` records and cut one page."""
    total = len(matched)
    if query.sort_by:
        matched = _sort(
            list(matched),
            query.sort_by,
            query.order == "desc",
            chronological=query.sort_by == query.timestamp_field,
        )
    limit = max(query.limit, 1)
    offset = (max(query.page, 1) - 1) * limit
    return Page(items=matched[offset:offset + limit], total=total, page=query.page, limit=limit)


def run_list_query(
    records: Iterable[Mapping[str, Any]],
    spec: ResourceQuerySpec,
    query: ListQuery,
) -> Page:
    """Filter, search, sort and paginate ``records``."""
    return paginate(select_records(records, spec, query), query)

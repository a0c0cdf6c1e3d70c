"""Filtering and sorting shared by the list endpoints.

Every list query gets the same three knobs: a case-insensitive substring
search over a fixed set of columns, a date range on one of an entity's
date columns, and a sort picked from an explicit allow-list. Client input
only ever selects from these mappings; it is never turned into a column
name.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import Select, or_

from clientdesk.errors import InvalidInput
from clientdesk.schedule import as_utc

SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class ListFilters:
    """Query-string filters for a list endpoint, already parsed."""

    search: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    date_field: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class ListPolicy:
    """Per-entity allow-lists: what can be searched, ranged and sorted."""

    search_columns: Sequence[Any]
    date_columns: Mapping[str, Any]
    default_date_field: str
    sort_columns: Mapping[str, Any]
    default_sort_field: str
    default_sort_order: str = "asc"
    tiebreaker: Any = None


def parse_date_param(
    value: Optional[str], field: str, end_of_day: bool = False
) -> Optional[datetime]:
    """Parse an ISO date or datetime query parameter into an aware UTC datetime.

    A bare date used as an upper bound covers the whole day.
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput.for_field(field, f"Invalid date: {value!r}")
    if end_of_day and len(raw) == 10:
        parsed = parsed + timedelta(days=1) - timedelta(microseconds=1)
    return as_utc(parsed)


def apply_search(q: Select, columns: Sequence[Any], term: str) -> Select:
    term = term.strip()
    if not term:
        return q
    return q.where(or_(*[col.icontains(term, autoescape=True) for col in columns]))


def apply_date_range(
    q: Select,
    column: Any,
    start: Optional[datetime],
    end: Optional[datetime],
) -> Select:
    if start is not None:
        q = q.where(column >= start)
    if end is not None:
        q = q.where(column <= end)
    return q


def resolve_date_column(policy: ListPolicy, date_field: Optional[str]) -> Any:
    """Unknown date fields fall back to the entity's default."""
    return policy.date_columns.get(date_field or "", policy.date_columns[policy.default_date_field])


def resolve_sort(policy: ListPolicy, sort_field: Optional[str], sort_order: Optional[str]) -> list[Any]:
    """ORDER BY clauses for a requested sort, falling back to the defaults."""
    column = policy.sort_columns.get(sort_field or "")
    if column is None:
        column = policy.sort_columns[policy.default_sort_field]
    order = sort_order if sort_order in SORT_ORDERS else policy.default_sort_order
    clauses = [column.desc() if order == "desc" else column.asc()]
    if policy.tiebreaker is not None:
        clauses.append(policy.tiebreaker.asc())
    return clauses


def apply_list_filters(q: Select, policy: ListPolicy, filters: ListFilters) -> Select:
    """Search + date range + sort, in one go."""
    q = apply_search(q, policy.search_columns, filters.search)
    q = apply_date_range(
        q,
        resolve_date_column(policy, filters.date_field),
        filters.start_date,
        filters.end_date,
    )
    return q.order_by(*resolve_sort(policy, filters.sort_field, filters.sort_order))

"""Query-string parsing shared by the list endpoints.

Dates arrive as ISO strings (``2024-01-31`` or a full datetime) and are
parsed here so a malformed one yields a 400 naming the parameter.
"""

from typing import Optional

from fastapi import Query

from clientdesk.services.listing import ListFilters, parse_date_param


def list_filters(
    search: str = Query("", description="Case-insensitive substring search"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    date_field: Optional[str] = Query(None, alias="dateField"),
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
) -> ListFilters:
    return ListFilters(
        search=search,
        start_date=parse_date_param(start_date, "startDate"),
        end_date=parse_date_param(end_date, "endDate", end_of_day=True),
        date_field=date_field,
        sort_field=sort_field,
        sort_order=sort_order.lower() if sort_order else None,
    )

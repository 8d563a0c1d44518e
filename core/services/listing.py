# =============================================================================
# core/services/listing.py - Filtered, Sorted, Paginated Listings
# =============================================================================
# Every listing (projects, tasks, a project's tasks, my tasks, users) runs
# through fetch_page():
#
#   1. start a query on one table
#   2. add fixed filters (e.g. project_id, assigned_user_id)
#   3. add optional filters, only for parameters present and non-blank:
#        substring filters -> ilike '%value%'
#        exact filters     -> eq
#   4. order by the allow-listed sort field and direction, id as tie-breaker
#   5. count matching rows, then fetch one page of them
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any

from app.config import settings
from app.exceptions import FormValidationError, InvalidSortError
from core.models.common import ListQuery, SortDirection, Status
from core.models.pagination import Page
from core.models.project import PROJECT_SORT_FIELDS
from core.models.task import TASK_SORT_FIELDS
from core.models.user import USER_SORT_FIELDS
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    """Which table to list and which ListQuery fields apply to it."""
    table: str
    sortable: tuple[str, ...]
    substring_filters: tuple[str, ...] = ("name",)
    exact_filters: tuple[str, ...] = ("status",)
    choices: dict[str, tuple[str, ...]] = field(default_factory=dict)


PROJECT_LISTING = Listing(
    table="projects",
    sortable=PROJECT_SORT_FIELDS,
    choices={"status": tuple(Status.values())},
)

TASK_LISTING = Listing(
    table="tasks",
    sortable=TASK_SORT_FIELDS,
    choices={"status": tuple(Status.values())},
)

USER_LISTING = Listing(
    table="users",
    sortable=USER_SORT_FIELDS,
    substring_filters=("name", "email"),
    exact_filters=(),
)


def resolve_sort(listing: Listing, query: ListQuery) -> tuple[str, bool]:
    """
    Check the requested ordering against the listing's allow-list.

    Returns:
        (column, descending)

    Raises:
        InvalidSortError: For a column or direction outside the allow-list
    """
    if query.sort_field not in listing.sortable:
        raise InvalidSortError("sort_field", query.sort_field, list(listing.sortable))
    if query.sort_direction not in SortDirection.values():
        raise InvalidSortError("sort_direction", query.sort_direction, SortDirection.values())
    return query.sort_field, query.sort_direction == SortDirection.DESC.value


def active_filters(listing: Listing, query: ListQuery) -> dict[str, str]:
    """
    Collect the filters this request actually asks for.

    Absent parameters produce no filter at all; ListQuery has already
    turned blank strings into None.
    """
    filters: dict[str, str] = {}
    for name in listing.substring_filters + listing.exact_filters:
        value = getattr(query, name, None)
        if value is None:
            continue
        allowed = listing.choices.get(name)
        if allowed is not None and value not in allowed:
            raise FormValidationError({name: [f"The selected {name} is invalid."]})
        filters[name] = value
    return filters


def _filtered(
    listing: Listing,
    filters: dict[str, str],
    base_filters: dict[str, Any],
    *select_args: str,
    **select_kwargs: Any,
):
    client = SupabaseClient.get_client()
    builder = client.table(listing.table).select(*select_args, **select_kwargs)

    for column, value in base_filters.items():
        builder = builder.eq(column, value)

    for column, value in filters.items():
        if column in listing.substring_filters:
            builder = builder.ilike(column, f"%{value}%")
        else:
            builder = builder.eq(column, value)

    return builder


def fetch_page(
    listing: Listing,
    query: ListQuery,
    base_filters: dict[str, Any] | None = None,
    per_page: int | None = None,
) -> Page:
    """
    Run one listing query.

    Args:
        listing: Table and allowed filters/sort fields
        query: Parameters of the request
        base_filters: Mandatory equality filters (e.g. {"project_id": 3})
        per_page: Page size, defaults to settings.PAGE_SIZE

    Returns:
        Page with the raw rows of the requested page and the total count

    Raises:
        InvalidSortError: Sort field/direction not allowed
        FormValidationError: Filter value outside its choices
        SupabaseClientError: If a query fails
    """
    sort_field, descending = resolve_sort(listing, query)
    filters = active_filters(listing, query)
    base_filters = base_filters or {}
    per_page = per_page or settings.PAGE_SIZE
    offset = (query.page - 1) * per_page

    try:
        count_response = _filtered(
            listing, filters, base_filters, "id", count="exact", head=True
        ).execute()
        total = count_response.count or 0

        rows: list[dict[str, Any]] = []
        if offset < total:
            builder = _filtered(listing, filters, base_filters, "*").order(sort_field, desc=descending)
            if sort_field != "id":
                builder = builder.order("id", desc=descending)
            response = builder.range(offset, offset + per_page - 1).execute()
            rows = response.data or []

    except SupabaseClientError:
        raise
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to list {listing.table}: {e}",
            code="LIST_FAILED",
            details={"table": listing.table, "filters": filters, "sort_field": sort_field},
        )

    logger.debug(
        f"Listed {listing.table}: filters={filters} base={base_filters} "
        f"sort={sort_field} desc={descending} page={query.page} total={total}"
    )
    return Page(items=rows, total=total, current_page=query.page, per_page=per_page)

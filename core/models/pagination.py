# =============================================================================
# core/models/pagination.py - Paginated Result Sets
# =============================================================================
# A Page is one slice of a filtered, sorted listing together with the total
# row count. It renders itself into the envelope clients page through:
#
#   {
#     "data":  [...],
#     "links": {"first", "last", "prev", "next"},
#     "meta":  {"current_page", "from", "to", "last_page", "per_page",
#               "total", "path", "links": [{"url", "label", "active"}, ...]}
#   }
#
# Numbered links show `on_each_side` pages around the current page. Long
# ranges collapse into a slider: the first two pages, "...", the window,
# "...", the last two pages.
# =============================================================================

from dataclasses import dataclass
from math import ceil
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel

PREVIOUS_LABEL = "&laquo; Previous"
NEXT_LABEL = "Next &raquo;"
ELLIPSIS = "..."


class PageLink(BaseModel):
    """One entry of the numbered link list."""
    url: str | None
    label: str
    active: bool


def page_window(current_page: int, last_page: int, on_each_side: int = 1) -> list[list[int] | str]:
    """
    Compute the groups of page numbers to render.

    Returns a list of page-number runs separated by "..." markers.

    Example:
        page_window(1, 3)    # [[1, 2, 3]]
        page_window(10, 20)  # [[1, 2], "...", [9, 10, 11], "...", [19, 20]]
    """
    # Too few pages to bother with a slider
    if last_page < on_each_side * 2 + 8:
        return [list(range(1, last_page + 1))]

    window = on_each_side + 4
    start = [1, 2]
    finish = [last_page - 1, last_page]

    if current_page <= window:
        return [list(range(1, window + on_each_side + 1)), ELLIPSIS, finish]

    if current_page > last_page - window:
        first_tail_page = last_page - (window + (on_each_side - 1))
        return [start, ELLIPSIS, list(range(first_tail_page, last_page + 1))]

    slider = list(range(current_page - on_each_side, current_page + on_each_side + 1))
    return [start, ELLIPSIS, slider, ELLIPSIS, finish]


@dataclass
class Page:
    """One page of rows plus what is needed to paginate further."""
    items: list[dict[str, Any]]
    total: int
    current_page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.per_page))

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page

    @property
    def from_item(self) -> int | None:
        return self.offset + 1 if self.items else None

    @property
    def to_item(self) -> int | None:
        return self.offset + len(self.items) if self.items else None

    def url_for(self, page: int, path: str, params: dict[str, Any] | None = None) -> str:
        query = {key: value for key, value in (params or {}).items() if key != "page"}
        query["page"] = page
        return f"{path}?{urlencode(query)}"

    def links(self, path: str, params: dict[str, Any] | None = None, on_each_side: int = 1) -> list[PageLink]:
        """Previous link, numbered links with ellipses, next link."""
        has_previous = self.current_page > 1
        has_next = self.current_page < self.last_page

        links = [PageLink(
            url=self.url_for(self.current_page - 1, path, params) if has_previous else None,
            label=PREVIOUS_LABEL,
            active=False,
        )]

        for element in page_window(self.current_page, self.last_page, on_each_side):
            if element == ELLIPSIS:
                links.append(PageLink(url=None, label=ELLIPSIS, active=False))
                continue
            for number in element:
                links.append(PageLink(
                    url=self.url_for(number, path, params),
                    label=str(number),
                    active=number == self.current_page,
                ))

        links.append(PageLink(
            url=self.url_for(self.current_page + 1, path, params) if has_next else None,
            label=NEXT_LABEL,
            active=False,
        ))
        return links

    def to_envelope(
        self,
        data: list[dict[str, Any]],
        path: str,
        params: dict[str, Any] | None = None,
        on_each_side: int = 1,
    ) -> dict[str, Any]:
        """Render `data` (the serialized items) with pagination metadata."""
        return {
            "data": data,
            "links": {
                "first": self.url_for(1, path, params),
                "last": self.url_for(self.last_page, path, params),
                "prev": self.url_for(self.current_page - 1, path, params) if self.current_page > 1 else None,
                "next": self.url_for(self.current_page + 1, path, params) if self.current_page < self.last_page else None,
            },
            "meta": {
                "current_page": self.current_page,
                "from": self.from_item,
                "to": self.to_item,
                "last_page": self.last_page,
                "per_page": self.per_page,
                "total": self.total,
                "path": path,
                "links": [link.model_dump() for link in self.links(path, params, on_each_side)],
            },
        }

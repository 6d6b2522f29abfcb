"""Page arithmetic: total pages, the bounded link window and bounds correction."""

import math
from dataclasses import dataclass
from typing import Optional, Union


def total_pages(total_items: int, items_per_page: int) -> int:
    """Number of pages needed for ``total_items``; never less than one."""
    if items_per_page <= 0:
        raise ValueError(f"items_per_page must be positive, got {items_per_page}")
    return max(1, math.ceil(max(0, total_items) / items_per_page))


@dataclass(frozen=True)
class PageLink:
    """A clickable link to ``page``."""

    page: int
    is_active: bool = False


@dataclass(frozen=True)
class EllipsisMarker:
    """Non-interactive marker for omitted pages."""

    position: str  # "start" or "end"


WindowItem = Union[PageLink, EllipsisMarker]


@dataclass(frozen=True)
class NavLink:
    """Previous/next link. ``page`` is always the correct target, even when disabled."""

    page: int
    disabled: bool


@dataclass(frozen=True)
class PaginationNav:
    previous: NavLink
    items: tuple
    next: Optional[NavLink]
    total_pages: int


def pagination_window(current_page: int, pages: int) -> list[WindowItem]:
    """Build the ordered link sequence for ``current_page`` out of ``pages``.

    Page 1 is always present and the last page is present when ``pages > 1``.
    Up to three middle pages centred on ``current_page`` sit between them, with
    an ellipsis on each side that leaves a gap.
    """
    pages = max(1, pages)
    items: list[WindowItem] = [PageLink(1, is_active=current_page == 1)]
    if pages == 1:
        return items

    start_page = max(2, current_page - 1)
    end_page = min(pages - 1, current_page + 1)

    if start_page > 2:
        items.append(EllipsisMarker("start"))

    for page in range(start_page, end_page + 1):
        items.append(PageLink(page, is_active=current_page == page))

    if end_page < pages - 1:
        items.append(EllipsisMarker("end"))

    items.append(PageLink(pages, is_active=current_page == pages))
    return items


def pagination_nav(current_page: int, pages: int) -> PaginationNav:
    """Window plus previous/next links, disabled exactly at the boundaries."""
    pages = max(1, pages)
    previous = NavLink(page=max(1, current_page - 1), disabled=current_page <= 1)
    next_link = None
    if pages > 1:
        next_link = NavLink(page=min(pages, current_page + 1), disabled=current_page >= pages)
    return PaginationNav(
        previous=previous,
        items=tuple(pagination_window(current_page, pages)),
        next=next_link,
        total_pages=pages,
    )


def corrected_page(current_page: int, total_items: int, items_per_page: int) -> Optional[int]:
    """Return the page to request when ``current_page`` is past the last page.

    Returns ``None`` when ``current_page`` is already in range. Correction is
    downward only: a page below range is left to the owner.
    """
    max_pages = total_pages(total_items, items_per_page)
    if current_page > max_pages:
        return max_pages
    return None


def range_summary(current_page: int, items_per_page: int, total_items: int) -> tuple[int, int, int]:
    """First and last item numbers shown on ``current_page`` plus the total."""
    if total_items <= 0:
        return 0, 0, 0
    first = (current_page - 1) * items_per_page + 1
    last = min(current_page * items_per_page, total_items)
    return first, last, total_items

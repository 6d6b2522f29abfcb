"""Pure projection of the browser inputs into a renderable view model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Hashable, Optional, Sequence

from gridbrowser.core.columns import ColumnSet, RowT
from gridbrowser.core.pagination import PaginationNav, pagination_nav, range_summary, total_pages

DEFAULT_EMPTY_MESSAGE = "No items found."
DEFAULT_EMPTY_SEARCH_MESSAGE = "No items found matching your search."
ERROR_MESSAGE_TEMPLATE = "Error loading data: {message}"


class VisualState(Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


def select_visual_state(is_loading: bool, row_count: int) -> VisualState:
    if is_loading:
        return VisualState.LOADING
    if row_count == 0:
        return VisualState.EMPTY
    return VisualState.POPULATED


def describe_error(error: Any) -> str:
    """Error text shown verbatim to the user."""
    return ERROR_MESSAGE_TEMPLATE.format(message=str(error))


@dataclass(frozen=True)
class HeaderView:
    column_id: str
    label: Any
    width: Optional[int]


@dataclass(frozen=True)
class RowView(Generic[RowT]):
    key: Hashable
    index: int
    cells: tuple
    row: RowT


@dataclass(frozen=True)
class BrowserInputs(Generic[RowT]):
    """Everything the owner supplies to the browser for one render."""

    data: Sequence[RowT] = ()
    total_items: int = 0
    current_page: int = 1
    items_per_page: int = 15
    is_loading: bool = False
    error: Any = None

    def __post_init__(self):
        if self.current_page < 1:
            raise ValueError(f"current_page must be at least 1, got {self.current_page}")
        if self.items_per_page < 1:
            raise ValueError(f"items_per_page must be at least 1, got {self.items_per_page}")
        if self.total_items < 0:
            raise ValueError(f"total_items must not be negative, got {self.total_items}")


@dataclass(frozen=True)
class TableView(Generic[RowT]):
    headers: tuple
    state: VisualState
    error_message: Optional[str] = None
    skeleton_rows: int = 0
    empty_message: Optional[str] = None
    show_reset: bool = False
    rows: tuple = field(default_factory=tuple)
    pagination: Optional[PaginationNav] = None
    summary: Optional[tuple] = None

    @property
    def shows_grid(self) -> bool:
        return self.error_message is None


def present(
    columns: ColumnSet[RowT],
    inputs: BrowserInputs[RowT],
    committed_term: str = "",
    *,
    row_key: Optional[Callable[[RowT], Hashable]] = None,
    can_reset: bool = False,
    show_pagination: bool = True,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
    empty_search_message: str = DEFAULT_EMPTY_SEARCH_MESSAGE,
) -> TableView[RowT]:
    """Compute the view for one render.

    The result depends only on the arguments. While an error is reported the
    grid body is suppressed and no loading, empty or populated content is
    produced.
    """
    headers = tuple(HeaderView(column.id, column.render_header(), column.width) for column in columns)
    state = select_visual_state(inputs.is_loading, len(inputs.data))
    pages = total_pages(inputs.total_items, inputs.items_per_page)

    pagination = None
    summary = None
    if not inputs.is_loading:
        summary = range_summary(inputs.current_page, inputs.items_per_page, inputs.total_items)
        if show_pagination and pages > 1:
            pagination = pagination_nav(inputs.current_page, pages)

    if inputs.error is not None:
        return TableView(
            headers=headers,
            state=state,
            error_message=describe_error(inputs.error),
            pagination=pagination,
            summary=summary,
        )

    if state is VisualState.LOADING:
        return TableView(headers=headers, state=state, skeleton_rows=inputs.items_per_page)

    if state is VisualState.EMPTY:
        return TableView(
            headers=headers,
            state=state,
            empty_message=empty_search_message if committed_term else empty_message,
            show_reset=can_reset,
            pagination=pagination,
            summary=summary,
        )

    rows = []
    for index, row in enumerate(inputs.data):
        key = row_key(row) if row_key is not None else index
        rows.append(RowView(key=key, index=index, cells=tuple(columns.project(row)), row=row))
    return TableView(headers=headers, state=state, rows=tuple(rows), pagination=pagination, summary=summary)

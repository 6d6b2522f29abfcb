"""Generic paginated, searchable table widget."""

from typing import Any, Callable, Hashable, Optional, Sequence

from loguru import logger
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Button, DataTable, Input, Label, Select, Static

from gridbrowser.core.columns import ColumnDef, ColumnSet
from gridbrowser.core.debounce import SearchDebouncer
from gridbrowser.core.pagination import corrected_page
from gridbrowser.core.presenter import (
    DEFAULT_EMPTY_MESSAGE,
    DEFAULT_EMPTY_SEARCH_MESSAGE,
    BrowserInputs,
    TableView,
    VisualState,
    present,
)
from gridbrowser.ui.constants import (
    DEFAULT_ITEMS_PER_PAGE,
    ITEMS_PER_PAGE_LABEL,
    ITEMS_PER_PAGE_OPTIONS,
    RESET_FILTERS_LABEL,
    SEARCH_DEBOUNCE_MS,
    SEARCH_PLACEHOLDER,
    SKELETON_CHAR,
    SKELETON_DEFAULT_WIDTH,
    SUMMARY_TEMPLATE,
)
from gridbrowser.ui.widgets.pagination_bar import PaginationBar


# UI Element IDs
class DataBrowserIDs:
    """Constants for UI element IDs."""

    TOOLBAR = "browser-toolbar"
    SEARCH_INPUT = "browser-search"
    ERROR = "browser-error"
    TABLE = "browser-table"
    EMPTY = "browser-empty"
    EMPTY_MESSAGE = "browser-empty-message"
    RESET_BUTTON = "browser-reset"
    FOOTER = "browser-footer"
    SUMMARY = "browser-summary"
    PAGE_SIZE = "browser-page-size"
    PAGINATION = "browser-pagination"


class DataBrowser(Widget):
    """Table over caller-owned rows with debounced search and pagination.

    The browser never fetches or mutates data. The owner pushes ``data``,
    ``total_items``, ``current_page``, ``items_per_page``, ``is_loading`` and
    ``error``; the browser renders them and posts intents back as messages
    (and to the optional callbacks given at construction).
    """

    DEFAULT_CSS = """
    DataBrowser {
        height: auto;
        layout: vertical;
    }
    DataBrowser #browser-toolbar {
        height: auto;
    }
    DataBrowser #browser-search {
        width: 1fr;
        max-width: 60;
    }
    DataBrowser #browser-error {
        color: $error;
        padding: 1 0;
    }
    DataBrowser #browser-table {
        height: auto;
        max-height: 30;
    }
    DataBrowser #browser-empty {
        height: auto;
        align-horizontal: center;
        padding: 1 0;
    }
    DataBrowser #browser-empty-message {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    DataBrowser #browser-footer {
        height: auto;
    }
    DataBrowser #browser-summary {
        width: auto;
        padding: 1 2 0 0;
        color: $text-muted;
    }
    DataBrowser #browser-page-size {
        width: 12;
    }
    DataBrowser .page-size-label {
        padding: 1 1 0 1;
    }
    """

    # Reactive properties, owned by the caller
    data: list = reactive(list, always_update=True)
    total_items: int = reactive(0)
    current_page: int = reactive(1)
    items_per_page: int = reactive(DEFAULT_ITEMS_PER_PAGE)
    is_loading: bool = reactive(False)
    error: Any = reactive(None, always_update=True)

    class PageChangeRequested(Message):
        """Message sent when the browser asks the owner to show another page."""

        def __init__(self, browser: "DataBrowser", page: int) -> None:
            super().__init__()
            self.browser = browser
            self.page = page

        @property
        def control(self) -> "DataBrowser":
            return self.browser

    class ItemsPerPageChangeRequested(Message):
        """Message sent when the user picks another page size."""

        def __init__(self, browser: "DataBrowser", items_per_page: int) -> None:
            super().__init__()
            self.browser = browser
            self.items_per_page = items_per_page

        @property
        def control(self) -> "DataBrowser":
            return self.browser

    class SearchCommitted(Message):
        """Message sent once per distinct settled search term."""

        def __init__(self, browser: "DataBrowser", term: str) -> None:
            super().__init__()
            self.browser = browser
            self.term = term

        @property
        def control(self) -> "DataBrowser":
            return self.browser

    class RowClicked(Message):
        """Message sent when a row is selected, carrying the original row."""

        def __init__(self, browser: "DataBrowser", row: Any, index: int) -> None:
            super().__init__()
            self.browser = browser
            self.row = row
            self.index = index

        @property
        def control(self) -> "DataBrowser":
            return self.browser

    class ResetFiltersRequested(Message):
        """Message sent when the reset-filters action is pressed."""

        def __init__(self, browser: "DataBrowser") -> None:
            super().__init__()
            self.browser = browser

        @property
        def control(self) -> "DataBrowser":
            return self.browser

    def __init__(
        self,
        columns: Sequence[ColumnDef],
        *,
        data: Sequence[Any] = (),
        total_items: int = 0,
        current_page: int = 1,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        is_loading: bool = False,
        error: Any = None,
        row_key: Optional[Callable[[Any], Hashable]] = None,
        debounce_ms: int = SEARCH_DEBOUNCE_MS,
        search_placeholder: str = SEARCH_PLACEHOLDER,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
        empty_search_message: str = DEFAULT_EMPTY_SEARCH_MESSAGE,
        show_search: bool = True,
        show_pagination: bool = True,
        show_items_per_page: bool = True,
        items_per_page_options: Sequence[int] = ITEMS_PER_PAGE_OPTIONS,
        toolbar: Optional[Widget] = None,
        clickable: bool = False,
        can_reset: bool = False,
        on_search: Optional[Callable[[str], None]] = None,
        on_page_change: Optional[Callable[[int], None]] = None,
        on_items_per_page_change: Optional[Callable[[int], None]] = None,
        on_row_click: Optional[Callable[[Any], None]] = None,
        on_reset_filters: Optional[Callable[[], None]] = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(name=name, id=id, classes=classes)
        self.columns = ColumnSet.of(columns)
        self.row_key = row_key
        self.search_placeholder = search_placeholder
        self.empty_message = empty_message
        self.empty_search_message = empty_search_message
        self.show_search = show_search
        self.show_pagination = show_pagination
        self.show_items_per_page = show_items_per_page
        self.items_per_page_options = tuple(items_per_page_options)
        self.toolbar = toolbar
        self.clickable = clickable or on_row_click is not None
        self.can_reset = can_reset or on_reset_filters is not None

        self._on_search = on_search
        self._on_page_change = on_page_change
        self._on_items_per_page_change = on_items_per_page_change
        self._on_row_click = on_row_click
        self._on_reset_filters = on_reset_filters

        self._view: Optional[TableView] = None
        # Set once the columns exist; watchers fired before that are ignored
        self._ready = False
        self._debouncer = SearchDebouncer(self.set_timer, self._commit_search, debounce_ms=debounce_ms)

        # Seed the inputs without running watchers; the first sync happens on mount
        self.set_reactive(DataBrowser.data, list(data))
        self.set_reactive(DataBrowser.total_items, total_items)
        self.set_reactive(DataBrowser.current_page, current_page)
        self.set_reactive(DataBrowser.items_per_page, items_per_page)
        self.set_reactive(DataBrowser.is_loading, is_loading)
        self.set_reactive(DataBrowser.error, error)

    def compose(self) -> ComposeResult:
        if self.show_search or self.toolbar is not None:
            with Horizontal(id=DataBrowserIDs.TOOLBAR):
                if self.show_search:
                    yield Input(placeholder=self.search_placeholder, id=DataBrowserIDs.SEARCH_INPUT)
                if self.toolbar is not None:
                    yield self.toolbar
        yield Static("", id=DataBrowserIDs.ERROR)
        yield DataTable(id=DataBrowserIDs.TABLE, cursor_type="row", zebra_stripes=True)
        with Vertical(id=DataBrowserIDs.EMPTY):
            yield Static("", id=DataBrowserIDs.EMPTY_MESSAGE)
            if self.can_reset:
                yield Button(RESET_FILTERS_LABEL, variant="default", id=DataBrowserIDs.RESET_BUTTON)
        with Horizontal(id=DataBrowserIDs.FOOTER):
            yield Static("", id=DataBrowserIDs.SUMMARY)
            if self.show_items_per_page:
                yield Select(
                    [(str(size), size) for size in self.items_per_page_options],
                    value=self.items_per_page if self.items_per_page in self.items_per_page_options else Select.NULL,
                    allow_blank=self.items_per_page not in self.items_per_page_options,
                    id=DataBrowserIDs.PAGE_SIZE,
                )
                yield Label(ITEMS_PER_PAGE_LABEL, classes="page-size-label")
            yield PaginationBar(id=DataBrowserIDs.PAGINATION)

    def on_mount(self) -> None:
        """Create the columns and render the initial inputs."""
        table = self.query_one(f"#{DataBrowserIDs.TABLE}", DataTable)
        for column in self.columns:
            # Fixed widths keep placeholder and data rows aligned
            width = column.width or SKELETON_DEFAULT_WIDTH
            table.add_column(column.render_header(), width=width, key=column.id)
        self._ready = True
        self._sync(check_bounds=True)

    def on_unmount(self) -> None:
        """Release the pending search timer."""
        self._ready = False
        self._debouncer.cancel()

    # Reactive watchers
    def watch_data(self, data: list) -> None:
        self._sync()

    def watch_is_loading(self, is_loading: bool) -> None:
        self._sync()

    def watch_error(self, error: Any) -> None:
        self._sync()

    def watch_total_items(self, total_items: int) -> None:
        self._sync(check_bounds=True)

    def watch_current_page(self, current_page: int) -> None:
        self._sync(check_bounds=True)

    def watch_items_per_page(self, items_per_page: int) -> None:
        self._sync(check_bounds=True)

    # Public methods
    def set_inputs(self, **inputs: Any) -> None:
        """Apply several owner inputs at once and render a single time."""
        bounds_fields = {"total_items", "current_page", "items_per_page"}
        for field_name, value in inputs.items():
            if field_name not in BrowserInputs.__dataclass_fields__:
                raise TypeError(f"Unknown browser input '{field_name}'")
            if field_name == "data":
                value = list(value)
            self.set_reactive(getattr(DataBrowser, field_name), value)
        self._sync(check_bounds=bool(bounds_fields & inputs.keys()))

    def reset_search(self) -> None:
        """Clear the search box, its pending timer and the last committed term."""
        self._debouncer.reset()
        if self._ready and self.show_search:
            search_input = self.query_one(f"#{DataBrowserIDs.SEARCH_INPUT}", Input)
            with search_input.prevent(Input.Changed):
                search_input.value = ""
        self._sync()

    @property
    def committed_term(self) -> str:
        return self._debouncer.committed_term

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def view(self) -> Optional[TableView]:
        """The view model of the last render."""
        return self._view

    @property
    def visual_state(self) -> Optional[VisualState]:
        return self._view.state if self._view is not None else None

    def inputs(self) -> BrowserInputs:
        return BrowserInputs(
            data=tuple(self.data),
            total_items=self.total_items,
            current_page=self.current_page,
            items_per_page=self.items_per_page,
            is_loading=self.is_loading,
            error=self.error,
        )

    # Event handlers
    def on_input_changed(self, event: Input.Changed) -> None:
        """Feed keystrokes from the search box into the debouncer."""
        if event.input.id != DataBrowserIDs.SEARCH_INPUT:
            return
        event.stop()
        self._debouncer.feed(event.value)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Forward row selection as a click on the original row."""
        event.stop()
        if not self.clickable or self._view is None or self._view.state is not VisualState.POPULATED:
            return
        if self._view.error_message is not None:
            return
        index = int(event.row_key.value)
        row_view = self._view.rows[index]
        self.post_message(self.RowClicked(self, row_view.row, row_view.index))
        if self._on_row_click is not None:
            self._on_row_click(row_view.row)

    def on_pagination_bar_page_selected(self, event: PaginationBar.PageSelected) -> None:
        event.stop()
        self._request_page(event.page)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Request a new page size when the selector changes."""
        if event.select.id != DataBrowserIDs.PAGE_SIZE:
            return
        event.stop()
        if event.value is Select.NULL or event.value == self.items_per_page:
            return
        size = int(event.value)
        self.post_message(self.ItemsPerPageChangeRequested(self, size))
        if self._on_items_per_page_change is not None:
            self._on_items_per_page_change(size)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id != DataBrowserIDs.RESET_BUTTON:
            return
        event.stop()
        self.post_message(self.ResetFiltersRequested(self))
        if self._on_reset_filters is not None:
            self._on_reset_filters()

    # Private methods
    def _commit_search(self, term: str) -> None:
        self._sync()
        self.post_message(self.SearchCommitted(self, term))
        if self._on_search is not None:
            self._on_search(term)

    def _request_page(self, page: int) -> None:
        self.post_message(self.PageChangeRequested(self, page))
        if self._on_page_change is not None:
            self._on_page_change(page)

    def _check_page_bounds(self) -> None:
        """Ask the owner to move back when the current page is past the end."""
        page = corrected_page(self.current_page, self.total_items, self.items_per_page)
        if page is not None:
            logger.debug(f"Page {self.current_page} is out of range, requesting page {page}")
            self._request_page(page)

    def _sync(self, check_bounds: bool = False) -> None:
        """Recompute the view from the current inputs and render it."""
        if not self._ready:
            return
        self._view = present(
            self.columns,
            self.inputs(),
            self.committed_term,
            row_key=self.row_key,
            can_reset=self.can_reset,
            show_pagination=self.show_pagination,
            empty_message=self.empty_message,
            empty_search_message=self.empty_search_message,
        )
        self._render_view(self._view)
        if check_bounds:
            self._check_page_bounds()

    def _render_view(self, view: TableView) -> None:
        error = self.query_one(f"#{DataBrowserIDs.ERROR}", Static)
        table = self.query_one(f"#{DataBrowserIDs.TABLE}", DataTable)
        empty = self.query_one(f"#{DataBrowserIDs.EMPTY}", Vertical)

        error.display = view.error_message is not None
        error.update(view.error_message or "")

        table.clear()
        table.display = view.shows_grid and view.state is not VisualState.EMPTY
        empty.display = view.shows_grid and view.state is VisualState.EMPTY

        if view.shows_grid:
            if view.state is VisualState.LOADING:
                self._render_skeleton(table, view)
            elif view.state is VisualState.EMPTY:
                self.query_one(f"#{DataBrowserIDs.EMPTY_MESSAGE}", Static).update(view.empty_message or "")
            else:
                for row_view in view.rows:
                    table.add_row(*row_view.cells, key=str(row_view.index))

        self._render_footer(view)

    def _render_skeleton(self, table: DataTable, view: TableView) -> None:
        placeholders = [SKELETON_CHAR * (header.width or SKELETON_DEFAULT_WIDTH) for header in view.headers]
        for index in range(view.skeleton_rows):
            table.add_row(*placeholders, key=f"skeleton-{index}")

    def _render_footer(self, view: TableView) -> None:
        footer = self.query_one(f"#{DataBrowserIDs.FOOTER}", Horizontal)
        footer.display = view.summary is not None
        if view.summary is not None:
            first, last, total = view.summary
            summary = self.query_one(f"#{DataBrowserIDs.SUMMARY}", Static)
            summary.update(SUMMARY_TEMPLATE.format(first=first, last=last, total=total))
        if self.show_items_per_page:
            select = self.query_one(f"#{DataBrowserIDs.PAGE_SIZE}", Select)
            if self.items_per_page in self.items_per_page_options and select.value != self.items_per_page:
                with select.prevent(Select.Changed):
                    select.value = self.items_per_page
        self.query_one(f"#{DataBrowserIDs.PAGINATION}", PaginationBar).set_nav(view.pagination)

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Input
from textual.worker import get_current_worker

from gridbrowser.core.columns import ColumnDef
from gridbrowser.services.catalog import ListingCatalog, ListingPage
from gridbrowser.ui.constants import DEFAULT_ITEMS_PER_PAGE, ITEMS_PER_PAGE_OPTIONS, SEARCH_DEBOUNCE_MS
from gridbrowser.ui.modals.delete_modal import DeleteModal
from gridbrowser.ui.utils import format_location, format_price
from gridbrowser.ui.widgets.data_browser import DataBrowser
from gridbrowser.ui.widgets.title_bar import TitleBar

LISTING_COLUMNS = [
    ColumnDef("id", lambda row: str(row["id"]), header="#", size=5),
    ColumnDef("title", lambda row: row["title"], header="Title", size=28, min_size=12),
    ColumnDef("location", lambda row: format_location(row["city"], row["state"]), header="Location", size=22),
    ColumnDef("size", lambda row: row["size"], header="Size", size=10),
    ColumnDef("price", lambda row: format_price(row["price"]), header="Price", size=14, max_size=16),
]


class MainScreen(Screen):
    """Main screen owning the listing query state and feeding the browser."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("slash", "focus_search", "Search"),
        Binding("h", "help", "Help", show=False),
    ]

    def __init__(
        self,
        catalog: ListingCatalog,
        *,
        source: str = "sample data",
        debounce_ms: int = SEARCH_DEBOUNCE_MS,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        items_per_page_options=ITEMS_PER_PAGE_OPTIONS,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.catalog = catalog
        self.source = source
        self.debounce_ms = debounce_ms
        self.items_per_page_options = tuple(items_per_page_options)

        # Query state owned by the screen, never by the browser
        self.search_term = ""
        self.current_page = 1
        self.items_per_page = items_per_page

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(source=self.source, id="title-bar")
            with Container(id="content-container"):
                yield DataBrowser(
                    LISTING_COLUMNS,
                    row_key=lambda row: row["id"],
                    current_page=self.current_page,
                    items_per_page=self.items_per_page,
                    items_per_page_options=self.items_per_page_options,
                    is_loading=True,
                    debounce_ms=self.debounce_ms,
                    search_placeholder="Search by title, city or country...",
                    clickable=True,
                    can_reset=True,
                    id="listing-browser",
                )
            yield Footer(id="main-footer", show_command_palette=False)

    def on_mount(self) -> None:
        """Load the first page once the browser is in place."""
        self.load_listings()

    @property
    def browser(self) -> DataBrowser:
        return self.query_one("#listing-browser", DataBrowser)

    # Data loading
    def load_listings(self) -> None:
        """Fetch the current page in a worker thread."""
        self.browser.set_inputs(is_loading=True, error=None)
        self._fetch_page(self.search_term, self.current_page, self.items_per_page)

    @work(thread=True, exclusive=True, group="listings")
    def _fetch_page(self, term: str, page: int, items_per_page: int) -> None:
        worker = get_current_worker()
        try:
            result = self.catalog.fetch_page(term=term, page=page, items_per_page=items_per_page)
        except Exception as e:
            if not worker.is_cancelled:
                self.app.call_from_thread(self._on_listings_error, e)
            return
        if not worker.is_cancelled:
            self.app.call_from_thread(self._on_listings_loaded, result)

    def _on_listings_loaded(self, result: ListingPage) -> None:
        """Hand a fetched page to the browser."""
        self.query_one(TitleBar).load_error = False
        self.browser.set_inputs(
            data=result.rows,
            total_items=result.total_items,
            is_loading=False,
            error=None,
        )

    def _on_listings_error(self, error: Exception) -> None:
        """Report a failed fetch through the browser's error state."""
        self.query_one(TitleBar).load_error = True
        self.browser.set_inputs(data=[], is_loading=False, error=error)
        self.notify(f"Error loading listings: {error}", severity="error")

    # Browser intents
    def on_data_browser_page_change_requested(self, message: DataBrowser.PageChangeRequested) -> None:
        self.current_page = message.page
        self.browser.set_inputs(current_page=self.current_page)
        self.load_listings()

    def on_data_browser_items_per_page_change_requested(
        self, message: DataBrowser.ItemsPerPageChangeRequested
    ) -> None:
        self.items_per_page = message.items_per_page
        self.browser.set_inputs(items_per_page=self.items_per_page)
        self.load_listings()

    def on_data_browser_search_committed(self, message: DataBrowser.SearchCommitted) -> None:
        self.search_term = message.term
        self.current_page = 1
        self.browser.set_inputs(current_page=1)
        self.load_listings()

    def on_data_browser_row_clicked(self, message: DataBrowser.RowClicked) -> None:
        """Offer to delete the clicked listing."""

        def on_delete_result(result: bool) -> None:
            if result:
                # The result set shrank; the browser corrects the page if needed
                self.load_listings()
            self.call_later(self._focus_table)

        self.app.push_screen(DeleteModal(self.catalog, message.row), on_delete_result)

    def on_data_browser_reset_filters_requested(self, message: DataBrowser.ResetFiltersRequested) -> None:
        self.search_term = ""
        self.current_page = 1
        self.browser.reset_search()
        self.browser.set_inputs(current_page=1)
        self.load_listings()

    # Actions
    def action_refresh(self) -> None:
        """Reload the current page"""
        self.load_listings()

    def action_focus_search(self) -> None:
        """Move focus to the search box"""
        self.browser.query_one("#browser-search", Input).focus()

    def action_help(self) -> None:
        """Show help information"""
        self.notify(
            "Help: '/' to search, Enter on a row to delete it, 'r' to refresh, 'q' to quit.",
            severity="information",
        )

    def _focus_table(self) -> None:
        self.browser.query_one("#browser-table", DataTable).focus()

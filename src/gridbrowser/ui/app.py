"""Main gridbrowser application."""

from textual.app import App
from textual.binding import Binding

from gridbrowser.config import DEFAULT_THEME
from gridbrowser.services.catalog import ListingCatalog
from gridbrowser.ui.constants import DEFAULT_ITEMS_PER_PAGE, ITEMS_PER_PAGE_OPTIONS, SEARCH_DEBOUNCE_MS
from gridbrowser.ui.screens.main_screen import MainScreen


class GridBrowserApp(App):
    """Marketplace listings browser."""

    TITLE = "Listings Browser"
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        catalog: ListingCatalog,
        source: str = "sample data",
        debounce_ms: int = SEARCH_DEBOUNCE_MS,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        items_per_page_options=ITEMS_PER_PAGE_OPTIONS,
        theme: str = DEFAULT_THEME,
        **kwargs,
    ):
        """Initialize the app.

        Args:
            catalog: Listing catalog supplying the rows.
            source: Description of where the listings came from.
            debounce_ms: Search debounce window in milliseconds.
            items_per_page: Initial page size.
            items_per_page_options: Page sizes offered by the selector.
            theme: Name of a built-in Textual theme.
        """
        super().__init__(**kwargs)
        self.catalog = catalog
        self.source = source
        self.debounce_ms = debounce_ms
        self.items_per_page = items_per_page
        self.items_per_page_options = tuple(items_per_page_options)
        self.initial_theme = theme

    def on_mount(self) -> None:
        """Called when app starts."""
        self.theme = self.initial_theme
        self.push_screen(
            MainScreen(
                self.catalog,
                source=self.source,
                debounce_ms=self.debounce_ms,
                items_per_page=self.items_per_page,
                items_per_page_options=self.items_per_page_options,
            )
        )

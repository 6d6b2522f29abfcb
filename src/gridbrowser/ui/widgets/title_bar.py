from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar with the app name, data source and a load status indicator"""

    load_error: bool = reactive(False)

    def __init__(self, source: str = "sample data", **kwargs):
        super().__init__(**kwargs)
        self.source = source

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("Listings Browser", id="title")
            with Horizontal(id="status-container"):
                yield Static("●", id="status-indicator")
                yield Static(f"source: {self.source}", id="source-info")

    def watch_load_error(self, load_error: bool) -> None:
        """Turn the indicator red while the last load failed."""
        try:
            indicator = self.query_one("#status-indicator", Static)
            indicator.set_class(load_error, "-error")
        except NoMatches:
            # Not composed yet
            pass

"""Pagination bar widget rendering a computed page window."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Label

from gridbrowser.core.pagination import EllipsisMarker, NavLink, PageLink, PaginationNav


class PageButton(Button):
    """Button that requests a specific page."""

    def __init__(self, label: str, page: int, *, active: bool = False, disabled: bool = False, classes: str = ""):
        if active:
            classes = f"{classes} -active".strip()
        super().__init__(label, disabled=disabled, classes=classes)
        self.page = page
        self.is_current = active


class PaginationBar(Horizontal):
    """Previous link, page window with ellipses, next link."""

    DEFAULT_CSS = """
    PaginationBar {
        height: auto;
        width: auto;
    }
    PaginationBar PageButton {
        min-width: 5;
        margin: 0 1 0 0;
    }
    PaginationBar PageButton.-active {
        text-style: bold reverse;
    }
    PaginationBar .page-ellipsis {
        padding: 1 1 0 0;
    }
    """

    class PageSelected(Message):
        """Message sent when a page link is pressed."""

        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    def __init__(self, nav: PaginationNav | None = None, **kwargs):
        super().__init__(**kwargs)
        self._nav = nav

    @property
    def nav(self) -> PaginationNav | None:
        return self._nav

    def compose(self) -> ComposeResult:
        yield from self._build_items(self._nav)

    def set_nav(self, nav: PaginationNav | None) -> None:
        """Replace the rendered links with ``nav``; ``None`` hides the bar."""
        self.display = nav is not None
        if nav == self._nav:
            return
        self._nav = nav
        self.remove_children()
        widgets = list(self._build_items(nav))
        if widgets:
            self.mount(*widgets)

    def _build_items(self, nav: PaginationNav | None):
        if nav is None:
            return
        yield self._nav_button("‹ Previous", nav.previous, "page-prev")
        for item in nav.items:
            if isinstance(item, PageLink):
                yield PageButton(str(item.page), item.page, active=item.is_active, classes="page-link")
            elif isinstance(item, EllipsisMarker):
                yield Label("…", classes=f"page-ellipsis page-ellipsis-{item.position}")
        if nav.next is not None:
            yield self._nav_button("Next ›", nav.next, "page-next")

    def _nav_button(self, label: str, link: NavLink, classes: str) -> PageButton:
        return PageButton(label, link.page, disabled=link.disabled, classes=classes)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Translate page button presses into page requests."""
        if isinstance(event.button, PageButton):
            event.stop()
            self.post_message(self.PageSelected(event.button.page))

"""Delete modal for removing a marketplace listing."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from gridbrowser.services.catalog import ListingCatalog
from gridbrowser.ui.utils import listing_detail_rows


# UI Element IDs
class DeleteModalIDs:
    """Constants for UI element IDs."""

    DELETE_MODAL = "delete-modal"
    MODAL_TITLE = "modal-title"
    LISTING_TITLE = "listing-title"
    LISTING_DETAILS = "listing-details"
    BUTTON_CONTAINER = "button-container"
    DELETE_BUTTON = "delete-btn"
    CANCEL_BUTTON = "cancel-btn"


class DeleteModal(ModalScreen):
    """Modal screen showing a listing and asking to take it off the marketplace."""

    BINDINGS = [
        Binding("escape", "dismiss", "Cancel"),
        Binding("d", "delete", "Delete"),
    ]

    def __init__(self, catalog: ListingCatalog, listing: dict) -> None:
        """Initialize the delete modal.

        Args:
            catalog: Catalog the listing is removed from
            listing: The listing row that was clicked
        """
        super().__init__()
        self.catalog = catalog
        self.listing = listing
        self.details = listing_detail_rows(listing)

    def compose(self) -> ComposeResult:
        """Create the layout for the delete modal."""
        with Vertical(id=DeleteModalIDs.DELETE_MODAL):
            yield Static(f"Remove listing #{self.listing['id']}", id=DeleteModalIDs.MODAL_TITLE)
            yield Static(self.listing.get("title", ""), id=DeleteModalIDs.LISTING_TITLE)

            with Vertical(id=DeleteModalIDs.LISTING_DETAILS):
                for label, value in self.details:
                    field_id = label.lower()
                    with Horizontal(classes="detail-row"):
                        yield Label(f"{label}:", classes="detail-label")
                        yield Static(value, id=f"detail-{field_id}", classes="detail-value")

            yield Label("Buyers will no longer see this listing.", classes="warning")

            with Horizontal(id=DeleteModalIDs.BUTTON_CONTAINER):
                yield Button("Remove", variant="error", id=DeleteModalIDs.DELETE_BUTTON)
                yield Button("Keep", variant="default", id=DeleteModalIDs.CANCEL_BUTTON)

    def detail(self, label: str) -> str:
        """Displayed value for a detail row, e.g. ``detail("Price")``."""
        return dict(self.details)[label]

    def action_dismiss(self) -> None:
        """Close without removing the listing."""
        self.dismiss(None)

    def action_delete(self) -> None:
        self._delete_listing()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == DeleteModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == DeleteModalIDs.DELETE_BUTTON:
            self._delete_listing()

    @work(exclusive=True)
    async def _delete_listing(self) -> None:
        """Remove the listing from the catalog."""
        try:
            self.catalog.delete(self.listing["id"])
        except KeyError as e:
            self.notify(f"Remove failed: listing {e} no longer exists", severity="error")
            return
        self.notify(f"Removed '{self.listing['title']}' ({self.detail('Price')})", severity="information")
        # True tells the screen to reload the current page
        self.dismiss(True)

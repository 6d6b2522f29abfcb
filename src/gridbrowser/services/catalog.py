from dataclasses import dataclass

from loguru import logger

from gridbrowser.gateways.listings import ListingGateway

SEARCH_FIELDS = ("title", "city", "state", "country")


@dataclass(frozen=True)
class ListingPage:
    rows: list[dict]
    total_items: int
    page: int
    items_per_page: int


class ListingCatalog:
    """Search and page slicing over a listing gateway."""

    def __init__(self, gateway: ListingGateway):
        self.gateway = gateway

    def matches(self, listing: dict, term: str) -> bool:
        """Case-insensitive substring match against the searchable fields."""
        needle = term.casefold()
        return any(needle in str(listing.get(field, "")).casefold() for field in SEARCH_FIELDS)

    def fetch_page(self, *, term: str = "", page: int = 1, items_per_page: int = 15) -> ListingPage:
        """Return one page of listings matching ``term``.

        Pages past the end come back empty with the real total, leaving it to
        the caller to move back into range.
        """
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        if items_per_page < 1:
            raise ValueError(f"items_per_page must be at least 1, got {items_per_page}")

        term = term.strip()
        listings = self.gateway.list_listings()
        if term:
            listings = [listing for listing in listings if self.matches(listing, term)]

        start = (page - 1) * items_per_page
        rows = listings[start : start + items_per_page]
        logger.info(f"Fetched page {page} ({len(rows)} rows of {len(listings)}) for search '{term}'")
        return ListingPage(rows=rows, total_items=len(listings), page=page, items_per_page=items_per_page)

    def delete(self, listing_id: int) -> dict:
        return self.gateway.delete_listing(listing_id)

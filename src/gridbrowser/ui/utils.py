def format_price(amount: int | float, currency: str = "R$") -> str:
    """Format a price with thousands separators.

    Args:
        amount: Price in whole currency units

    Returns:
        Formatted price string (e.g., "R$ 1,250.00")
    """
    return f"{currency} {amount:,.2f}"


def format_location(city: str, state: str = "") -> str:
    """Format a city and state as "City, ST"."""
    if state:
        return f"{city}, {state}"
    return city


def listing_detail_rows(listing: dict) -> list[tuple[str, str]]:
    """Label/value pairs describing a listing, in display order.

    Args:
        listing: Listing row as supplied by the gateway

    Returns:
        Pairs for the location, size, country and price of the listing
    """
    return [
        ("Location", format_location(listing.get("city", ""), listing.get("state", ""))),
        ("Size", str(listing.get("size", ""))),
        ("Country", str(listing.get("country", ""))),
        ("Price", format_price(listing.get("price", 0))),
    ]

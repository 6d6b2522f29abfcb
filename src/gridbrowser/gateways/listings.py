import json
import threading
from functools import wraps
from pathlib import Path
from typing import Optional

from loguru import logger

SAMPLE_CITIES = [
    ("São Paulo", "SP"),
    ("Rio de Janeiro", "RJ"),
    ("Belo Horizonte", "MG"),
    ("Porto Alegre", "RS"),
    ("Brasília", "DF"),
    ("Salvador", "BA"),
    ("Curitiba", "PR"),
    ("Recife", "PE"),
    ("Fortaleza", "CE"),
]
SAMPLE_SIZES = ["Senior", "Mid-level", "Junior"]
REQUIRED_FIELDS = ("id", "title", "city", "state", "size", "country", "price")


class ListingNotFoundError(KeyError):
    """Raised when a listing id does not exist."""


def build_sample_listings(count: int = 64) -> list[dict]:
    """Deterministic sample marketplace listings."""
    listings = []
    for index in range(count):
        city, state = SAMPLE_CITIES[index % len(SAMPLE_CITIES)]
        size = SAMPLE_SIZES[index % len(SAMPLE_SIZES)]
        listings.append(
            {
                "id": index + 1,
                "title": f"{size} space #{index + 1}",
                "city": city,
                "state": state,
                "size": size,
                "country": "Brasil",
                "price": 100 + (index * 37) % 900,
            }
        )
    return listings


def locked(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return func(self, *args, **kwargs)

    return wrapper


class ListingGateway:
    """In-memory listing store, optionally seeded from a JSON file.

    Access is serialized because pages are fetched from worker threads.
    """

    def __init__(self, listings: Optional[list[dict]] = None):
        self._lock = threading.Lock()
        self._listings = [dict(listing) for listing in (listings if listings is not None else build_sample_listings())]

    @classmethod
    def from_file(cls, path: str | Path) -> "ListingGateway":
        """Load listings from a JSON array of objects.

        Raises:
            ValueError: If the file is not a JSON array of listing objects.
        """
        path = Path(path)
        logger.info(f"Loading listings from '{path}'")
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Error loading listings file {path}: {e}")

        if not isinstance(payload, list):
            raise ValueError(f"Listings file {path} must contain a JSON array")
        for entry in payload:
            missing = [field for field in REQUIRED_FIELDS if not isinstance(entry, dict) or field not in entry]
            if missing:
                raise ValueError(f"Listing {entry!r} is missing fields: {', '.join(missing)}")
        return cls(payload)

    # -------------------------List------------------------- #

    @locked
    def list_listings(self) -> list[dict]:
        """Snapshot of all listings in insertion order."""
        return [dict(listing) for listing in self._listings]

    @locked
    def count(self) -> int:
        return len(self._listings)

    # -------------------------Delete------------------------- #

    @locked
    def delete_listing(self, listing_id: int) -> dict:
        """Remove a listing by id and return it."""
        for index, listing in enumerate(self._listings):
            if listing["id"] == listing_id:
                logger.info(f"Deleting listing {listing_id}")
                return self._listings.pop(index)
        raise ListingNotFoundError(listing_id)

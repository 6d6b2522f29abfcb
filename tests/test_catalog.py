import json

import pytest

from gridbrowser.gateways.listings import ListingGateway, ListingNotFoundError, build_sample_listings
from gridbrowser.services.catalog import ListingCatalog


@pytest.fixture
def catalog():
    return ListingCatalog(ListingGateway())


class TestListingGateway:
    def test_sample_listings_are_deterministic(self):
        assert build_sample_listings(5) == build_sample_listings(5)
        assert [listing["id"] for listing in build_sample_listings(3)] == [1, 2, 3]

    def test_delete_removes_listing(self):
        gateway = ListingGateway(build_sample_listings(3))
        deleted = gateway.delete_listing(2)

        assert deleted["id"] == 2
        assert [listing["id"] for listing in gateway.list_listings()] == [1, 3]
        assert gateway.count() == 2

    def test_delete_unknown_listing_raises(self):
        gateway = ListingGateway(build_sample_listings(3))
        with pytest.raises(ListingNotFoundError):
            gateway.delete_listing(99)

    def test_list_returns_copies(self):
        gateway = ListingGateway(build_sample_listings(1))
        gateway.list_listings()[0]["title"] = "changed"
        assert gateway.list_listings()[0]["title"] != "changed"

    def test_from_file(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(json.dumps(build_sample_listings(4)), encoding="utf-8")

        gateway = ListingGateway.from_file(path)
        assert gateway.count() == 4

    def test_from_file_rejects_non_array(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(json.dumps({"id": 1}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON array"):
            ListingGateway.from_file(path)

    def test_from_file_rejects_missing_fields(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(json.dumps([{"id": 1, "title": "Desk"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="missing fields"):
            ListingGateway.from_file(path)

    def test_from_file_rejects_invalid_json(self, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ValueError, match="Error loading listings file"):
            ListingGateway.from_file(path)


class TestListingCatalog:
    def test_first_page(self, catalog):
        page = catalog.fetch_page(page=1, items_per_page=15)

        assert len(page.rows) == 15
        assert page.total_items == 64
        assert page.rows[0]["id"] == 1

    def test_last_partial_page(self, catalog):
        page = catalog.fetch_page(page=5, items_per_page=15)
        assert [row["id"] for row in page.rows] == [61, 62, 63, 64]

    def test_page_past_the_end_is_empty_with_real_total(self, catalog):
        page = catalog.fetch_page(page=9, items_per_page=15)
        assert page.rows == []
        assert page.total_items == 64

    def test_search_is_case_insensitive(self, catalog):
        page = catalog.fetch_page(term="salvador", items_per_page=50)

        assert page.total_items == 7
        assert all(row["city"] == "Salvador" for row in page.rows)

    def test_search_term_is_trimmed(self, catalog):
        assert catalog.fetch_page(term="  Recife  ").total_items == catalog.fetch_page(term="recife").total_items

    def test_search_without_matches(self, catalog):
        page = catalog.fetch_page(term="Lisboa")
        assert page.rows == []
        assert page.total_items == 0

    def test_invalid_paging_arguments(self, catalog):
        with pytest.raises(ValueError):
            catalog.fetch_page(page=0)
        with pytest.raises(ValueError):
            catalog.fetch_page(items_per_page=0)

    def test_delete_shrinks_results(self, catalog):
        catalog.delete(64)
        assert catalog.fetch_page().total_items == 63

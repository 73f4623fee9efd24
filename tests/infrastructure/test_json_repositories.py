"""Tests for the JSON-file repositories."""

import json
from decimal import Decimal

import pytest

from hims.domain.exceptions import NotFoundError
from hims.infrastructure.persistence.json_product_repository import JsonProductRepository
from hims.infrastructure.persistence.json_vendor_selection_repository import (
    JsonVendorSelectionRepository,
)
from tests.builders import make_product, make_selection


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        repo = JsonProductRepository(path)
        assert path.read_text(encoding="utf-8") == "[]"
        assert repo.find_all() == []

    def test_save_assigns_sequential_ids(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        first = repo.save(make_product(id=None, name="Onions"))
        second = repo.save(make_product(id=None, name="Garlic"))
        assert (first.id, second.id) == (1, 2)

        raw = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert [r["name"] for r in raw] == ["Onions", "Garlic"]
        assert raw[0]["storage_location"] == "Dry Storage"

    def test_find_by_id_round_trips(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(id=None, current_count=4.5))
        loaded = repo.find_by_id("1")
        assert loaded.current_count == 4.5
        assert loaded.stock_status.value == "critical"
        assert repo.find_by_id(2) is None

    def test_price_round_trips_exactly(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(id=None, price="0.10"))
        assert repo.find_by_id(1).price == Decimal("0.10")

    def test_update_and_stock_count(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(id=None))
        repo.update_stock_count(1, 3)
        assert repo.find_by_id(1).current_count == 3
        repo.adjust_stock_count(1, 2)
        assert repo.find_by_id(1).current_count == 5

    def test_update_missing(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(NotFoundError):
            repo.update(make_product(id=9))

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(id=None))
        repo.delete(1)
        assert repo.find_all() == []
        with pytest.raises(NotFoundError):
            repo.delete(1)


class TestJsonVendorSelectionRepository:

    def test_save_and_find_by_order(self, tmp_path):
        repo = JsonVendorSelectionRepository(tmp_path / "selections.json")
        repo.save(make_selection(id=None, house_order_item_id=500, house_order_id=7))
        repo.save(make_selection(id=None, house_order_item_id=501, house_order_id=8))
        repo.save(make_selection(id=None, house_order_item_id=502))
        assert [s.house_order_item_id for s in repo.find_by_order_id(7)] == [500]
        assert [s.house_order_item_id for s in repo.find_by_order_id("8")] == [501]
        assert len(repo.find_all()) == 3

    def test_override_persists(self, tmp_path):
        repo = JsonVendorSelectionRepository(tmp_path / "selections.json")
        repo.save(make_selection(id=None))
        repo.override_selection(500, 102, "chef.maria")

        reloaded = JsonVendorSelectionRepository(tmp_path / "selections.json")
        selection = reloaded.find_by_house_order_item_id(500)
        assert selection.vendor_item_id == 102
        assert selection.is_overridden is True
        assert selection.overridden_by == "chef.maria"

        reloaded.reset_override(500)
        assert repo.find_by_id(1).is_overridden is False

    def test_delete_missing(self, tmp_path):
        repo = JsonVendorSelectionRepository(tmp_path / "selections.json")
        with pytest.raises(NotFoundError):
            repo.delete(3)

"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from hims.domain.exceptions import ValidationError
from hims.domain.model.product import Product, StockStatus, TrackingUnit
from tests.builders import make_product


class TestProductCreation:

    def test_valid_product(self):
        p = make_product()
        assert p.name == "Yellow Onions"
        assert p.tracking_unit == TrackingUnit.POUND
        assert p.active is True

    def test_tracking_unit_string_coerced(self):
        p = make_product(tracking_unit="Case")
        assert p.tracking_unit == TrackingUnit.CASE

    def test_unknown_tracking_unit_rejected(self):
        with pytest.raises(ValidationError, match="Unknown tracking unit"):
            make_product(tracking_unit="crate")

    @pytest.mark.parametrize("field, value, message", [
        ("name", "  ", "Product name is required"),
        ("price", -0.01, "Price cannot be negative"),
        ("storage_location", "", "Storage location is required"),
        ("inventory_category", " ", "Inventory category is required"),
        ("par_level", -1, "Par level cannot be negative"),
        ("current_count", -1, "Current count cannot be negative"),
    ])
    def test_invariants_enforced(self, field, value, message):
        with pytest.raises(ValidationError, match=message):
            make_product(**{field: value})

    @pytest.mark.parametrize("field", ["price", "par_level", "current_count"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_numbers_rejected(self, field, value):
        with pytest.raises(ValidationError):
            make_product(**{field: value})

    def test_price_held_as_decimal(self):
        p = make_product(price=0.1)
        assert p.price == Decimal("0.1")
        assert p.formatted_price == "$0.10"

    def test_unparseable_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            make_product(price="a lot")


class TestProductMutators:

    def test_update_name_refreshes_timestamp(self):
        p = make_product()
        before = p.updated_at
        p.update_name("Red Onions")
        assert p.name == "Red Onions"
        assert p.updated_at >= before

    def test_update_name_empty_rejected(self):
        p = make_product()
        with pytest.raises(ValidationError, match="cannot be empty"):
            p.update_name("   ")
        assert p.name == "Yellow Onions"

    def test_update_price_negative_rejected(self):
        p = make_product()
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            p.update_price(-2)

    def test_update_price_accepts_text(self):
        p = make_product()
        p.update_price("2.40")
        assert p.price == Decimal("2.40")

    def test_non_finite_count_leaves_product_untouched(self):
        p = make_product(current_count=8)
        with pytest.raises(ValidationError):
            p.update_current_count(float("nan"))
        with pytest.raises(ValidationError):
            p.adjust_count(float("inf"))
        with pytest.raises(ValidationError):
            p.update_par_level(float("nan"))
        assert p.current_count == 8
        assert p.par_level == 20

    def test_update_storage_location_empty_rejected(self):
        p = make_product()
        with pytest.raises(ValidationError, match="Storage location cannot be empty"):
            p.update_storage_location("")

    def test_update_par_level(self):
        p = make_product()
        p.update_par_level(40)
        assert p.par_level == 40

    def test_update_current_count_negative_rejected(self):
        p = make_product()
        with pytest.raises(ValidationError, match="Current count cannot be negative"):
            p.update_current_count(-1)

    def test_adjust_count(self):
        p = make_product(current_count=10)
        p.adjust_count(-4)
        assert p.current_count == 6

    def test_adjust_count_below_zero_leaves_count_unchanged(self):
        p = make_product(current_count=3)
        stamp = p.updated_at
        with pytest.raises(ValidationError):
            p.adjust_count(-4)
        assert p.current_count == 3
        assert p.updated_at == stamp

    def test_activate_deactivate(self):
        p = make_product()
        p.deactivate()
        assert p.active is False
        p.activate()
        assert p.active is True

    def test_set_default_vendor_item(self):
        p = make_product()
        p.set_default_vendor_item(77)
        assert p.default_vendor_item_id == 77


class TestStockStatus:

    @pytest.mark.parametrize("par_level", [0, 1, 20])
    def test_zero_count_is_out_of_stock(self, par_level):
        p = make_product(par_level=par_level, current_count=0)
        assert p.stock_status == StockStatus.OUT_OF_STOCK

    def test_below_half_par_is_critical_not_low(self):
        p = make_product(par_level=20, current_count=9)
        assert p.is_low_stock
        assert p.stock_status == StockStatus.CRITICAL

    def test_low_stock(self):
        p = make_product(par_level=20, current_count=15)
        assert p.stock_status == StockStatus.LOW_STOCK
        assert p.stock_percentage == 75
        assert p.calculate_reorder_quantity() == 5

    def test_exactly_half_par_is_low_not_critical(self):
        p = make_product(par_level=20, current_count=10)
        assert p.stock_status == StockStatus.LOW_STOCK

    def test_at_par_is_normal(self):
        p = make_product(par_level=20, current_count=20)
        assert p.stock_status == StockStatus.NORMAL
        assert p.stock_display_text == "In Stock"

    def test_exactly_double_par_is_normal(self):
        p = make_product(par_level=20, current_count=40)
        assert p.stock_status == StockStatus.NORMAL

    def test_over_double_par_is_overstocked(self):
        p = make_product(par_level=20, current_count=45)
        assert p.stock_status == StockStatus.OVERSTOCKED
        assert p.stock_percentage == 100

    def test_display_text_follows_status(self):
        assert make_product(current_count=0).stock_display_text == "Out of Stock"
        assert make_product(current_count=2).stock_display_text == "Critical Stock"
        assert make_product(current_count=15).stock_display_text == "Low Stock"
        assert make_product(current_count=50).stock_display_text == "Overstocked"


class TestStockPercentageAndReorder:

    def test_percentage_zero_par(self):
        p = make_product(par_level=0, current_count=5)
        assert p.stock_percentage == 0

    def test_percentage_rounds_half_up(self):
        p = make_product(par_level=8, current_count=1)  # 12.5%
        assert p.stock_percentage == 13

    @pytest.mark.parametrize("par_level, current_count, expected", [
        (20, 15, 5),
        (20, 0, 20),
        (20, 20, 0),
        (20, 45, 0),
        (0, 3, 0),
    ])
    def test_reorder_quantity(self, par_level, current_count, expected):
        p = make_product(par_level=par_level, current_count=current_count)
        assert p.calculate_reorder_quantity() == max(0, par_level - current_count) == expected

    def test_out_of_stock_active_needs_reorder(self):
        p = make_product(par_level=20, current_count=0)
        assert p.stock_status == StockStatus.OUT_OF_STOCK
        assert p.needs_reorder is True

    def test_inactive_never_needs_reorder(self):
        p = make_product(par_level=20, current_count=5, active=False)
        assert p.needs_reorder is False

    def test_at_par_does_not_need_reorder(self):
        assert make_product(par_level=20, current_count=20).needs_reorder is False

    def test_stock_value_is_exact(self):
        p = make_product(price=0.1, current_count=3)
        assert p.stock_value == Decimal("0.3")

    def test_stock_value_with_fractional_count(self):
        p = make_product(price="2.19", current_count=2.5)
        assert p.stock_value == Decimal("5.475")


class TestProductSerialization:

    def test_to_dict_wire_shape(self):
        p = make_product(default_vendor_item_id=9)
        data = p.to_dict()
        assert set(data) == {
            "id", "name", "price", "active", "storage_location",
            "inventory_category", "tracking_unit", "par_level", "current_count",
            "default_vendor_item_id", "createdAt", "updatedAt",
        }
        assert data["tracking_unit"] == "pound"
        assert data["storage_location"] == "Dry Storage"

    def test_round_trip_preserves_observable_state(self):
        original = make_product(current_count=7, active=False, price=3.5)
        restored = Product.from_api(original.to_dict())
        assert restored.name == original.name
        assert restored.price == original.price
        assert restored.tracking_unit == original.tracking_unit
        assert restored.par_level == original.par_level
        assert restored.current_count == original.current_count
        assert restored.active == original.active
        assert restored.created_at == original.created_at

    def test_from_api_tolerates_missing_numbers(self):
        p = Product.from_api({
            "id": 4,
            "name": "Flour",
            "storage_location": "Dry Storage",
            "inventory_category": "Baking",
            "tracking_unit": "bag",
        })
        assert p.price == 0
        assert p.par_level == 0
        assert p.current_count == 0
        assert p.active is True

    def test_from_api_parses_numeric_strings(self):
        p = Product.from_api({
            "id": "4",
            "name": "Milk",
            "current_price_per_unit": "3.49",
            "price": "9.99",
            "storage_location": "Walk-in",
            "inventory_category": "Dairy",
            "tracking_unit": "gallon",
            "par_level": "6",
            "current_count": "2.5",
            "created_at": "2024-03-01T12:00:00Z",
        })
        assert p.price == Decimal("3.49")
        assert p.par_level == 6
        assert p.current_count == 2.5
        assert p.created_at.year == 2024

    def test_price_written_as_exact_text(self):
        assert make_product(price=0.1).to_dict()["price"] == "0.1"

    def test_from_api_non_finite_numbers_fall_back_to_zero(self):
        p = Product.from_api({
            "name": "Milk",
            "price": "NaN",
            "storage_location": "Walk-in",
            "inventory_category": "Dairy",
            "par_level": float("inf"),
            "current_count": float("nan"),
        })
        assert p.price == 0
        assert p.par_level == 0
        assert p.current_count == 0

    def test_from_api_missing_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.from_api({"storage_location": "A", "inventory_category": "B"})

    def test_same_identity(self):
        assert make_product(id=3).same_identity(make_product(id=3, name="Other"))
        assert not make_product(id=None).same_identity(make_product(id=None))

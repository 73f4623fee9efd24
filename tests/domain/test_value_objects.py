"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from hims.domain.exceptions import ValidationError
from hims.domain.model.value_objects import (
    Alternative,
    SelectionReason,
    SelectionStrategy,
    VendorItemRef,
)


# ── SelectionStrategy ────────────────────────────────────────────────────────


class TestSelectionStrategy:

    def test_parse_from_string(self):
        assert SelectionStrategy.parse("preferred_vendor") == SelectionStrategy.PREFERRED_VENDOR

    def test_parse_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Unknown selection strategy"):
            SelectionStrategy.parse("cheapest")

    def test_parse_missing_rejected(self):
        with pytest.raises(ValidationError, match="strategy is required"):
            SelectionStrategy.parse(None)

    def test_display_name(self):
        assert SelectionStrategy.LOWEST_PRICE.display_name == "Lowest Price"
        assert SelectionStrategy.BEST_VALUE.display_name == "Best Value"


# ── SelectionReason ──────────────────────────────────────────────────────────


class TestSelectionReason:

    def test_strategy_string_coerced(self):
        reason = SelectionReason("best_value", "Good yield per case", 0.9)
        assert reason.strategy == SelectionStrategy.BEST_VALUE

    def test_bounds_inclusive(self):
        assert SelectionReason("best_value", confidence_score=0).confidence_score == 0
        assert SelectionReason("best_value", confidence_score=1).confidence_score == 1

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 1"):
            SelectionReason("best_value", confidence_score=1.5)

    def test_immutable(self):
        reason = SelectionReason("best_value", confidence_score=0.5)
        with pytest.raises(AttributeError):
            reason.confidence_score = 0.9

    def test_from_dict_empty_rejected(self):
        with pytest.raises(ValidationError, match="Selection reason is required"):
            SelectionReason.from_dict({})


# ── Alternative ──────────────────────────────────────────────────────────────


class TestAlternative:

    def test_requires_vendor_item_id(self):
        with pytest.raises(ValidationError, match="vendor item ID is required"):
            Alternative(vendor_item_id=0, cost_difference=1.0)

    def test_from_dict_without_vendor_item(self):
        alt = Alternative.from_dict({"vendor_item_id": 5, "cost_difference": "-1.5"})
        assert alt.vendor_item is None
        assert alt.cost_difference == -1.5

    def test_cost_difference_held_as_decimal(self):
        alt = Alternative(vendor_item_id=5, cost_difference=0.1)
        assert alt.cost_difference == Decimal("0.1")
        assert alt.to_dict()["cost_difference"] == "0.1"

    def test_vendor_item_without_vendor(self):
        ref = VendorItemRef.from_dict({"id": 5, "product_name": "Butter", "price_per_case": 48})
        assert ref.vendor is None
        assert ref.to_dict()["vendor"] is None

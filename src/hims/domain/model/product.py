"""Product aggregate (a "house item").

A product is something the kitchen keeps on hand: it lives in a storage
location, is counted in a tracking unit, and has a par level, the quantity
the house wants on the shelf. The stock classification and reorder rules
below are the single source of truth for every query and summary that
talks about stock.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from hims.domain.exceptions import ValidationError
from hims.domain.model.money import format_money, parse_money, to_money
from hims.domain.model.parsing import parse_number
from hims.domain.model.timestamps import format_timestamp, parse_timestamp, utc_now


class TrackingUnit(Enum):
    EACH = "each"
    POUND = "pound"
    GALLON = "gallon"
    DOZEN = "dozen"
    CASE = "case"
    BOX = "box"
    BAG = "bag"
    BOTTLE = "bottle"

    @staticmethod
    def parse(value: TrackingUnit | str) -> TrackingUnit:
        if isinstance(value, TrackingUnit):
            return value
        try:
            return TrackingUnit(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown tracking unit: {value!r}") from exc


class StockStatus(Enum):
    NORMAL = "normal"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    CRITICAL = "critical"
    OVERSTOCKED = "overstocked"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
CRITICAL_STOCK_RATIO = 0.5
OVERSTOCK_RATIO = 2

_STOCK_DISPLAY_TEXT = {
    StockStatus.OUT_OF_STOCK: "Out of Stock",
    StockStatus.CRITICAL: "Critical Stock",
    StockStatus.LOW_STOCK: "Low Stock",
    StockStatus.OVERSTOCKED: "Overstocked",
    StockStatus.NORMAL: "In Stock",
}


@dataclass
class Product:
    """Aggregate root for a stocked house item.

    Invariants:
    - ``name``, ``storage_location`` and ``inventory_category`` are non-empty
    - ``price``, ``par_level`` and ``current_count`` are finite and never negative
    - ``price`` is a Decimal

    ``id`` is ``None`` until a repository assigns one on save.
    """

    id: int | str | None
    name: str
    price: Decimal
    storage_location: str
    inventory_category: str
    tracking_unit: TrackingUnit
    par_level: float
    current_count: float = 0
    active: bool = True
    default_vendor_item_id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.tracking_unit = TrackingUnit.parse(self.tracking_unit)
        self.price = to_money(self.price)
        _require_text(self.name, "Product name is required")
        _require_non_negative(self.price, "Price cannot be negative")
        _require_text(self.storage_location, "Storage location is required")
        _require_text(self.inventory_category, "Inventory category is required")
        _require_non_negative(self.par_level, "Par level cannot be negative")
        _require_non_negative(self.current_count, "Current count cannot be negative")

    # --- Mutators -------------------------------------------------------------

    def update_name(self, name: str) -> None:
        _require_text(name, "Product name cannot be empty")
        self.name = name
        self.touch()

    def update_price(self, price: Decimal | float | str) -> None:
        price = to_money(price)
        _require_non_negative(price, "Price cannot be negative")
        self.price = price
        self.touch()

    def update_storage_location(self, location: str) -> None:
        _require_text(location, "Storage location cannot be empty")
        self.storage_location = location
        self.touch()

    def update_inventory_category(self, category: str) -> None:
        _require_text(category, "Inventory category cannot be empty")
        self.inventory_category = category
        self.touch()

    def update_tracking_unit(self, unit: TrackingUnit | str) -> None:
        self.tracking_unit = TrackingUnit.parse(unit)
        self.touch()

    def update_par_level(self, par_level: float) -> None:
        _require_non_negative(par_level, "Par level cannot be negative")
        self.par_level = par_level
        self.touch()

    def update_current_count(self, count: float) -> None:
        _require_non_negative(count, "Current count cannot be negative")
        self.current_count = count
        self.touch()

    def adjust_count(self, delta: float) -> None:
        """Apply a relative stock change.

        The new count is validated before anything is assigned, so a
        rejected adjustment leaves the product untouched.
        """
        self.update_current_count(self.current_count + delta)

    def activate(self) -> None:
        self.active = True
        self.touch()

    def deactivate(self) -> None:
        self.active = False
        self.touch()

    def set_default_vendor_item(self, vendor_item_id: int | None) -> None:
        self.default_vendor_item_id = vendor_item_id
        self.touch()

    def touch(self) -> None:
        self.updated_at = utc_now()

    # --- Stock classification -------------------------------------------------

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_count == 0

    @property
    def is_critical_stock(self) -> bool:
        return 0 < self.current_count < self.par_level * CRITICAL_STOCK_RATIO

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.current_count < self.par_level

    @property
    def is_overstocked(self) -> bool:
        return self.current_count > self.par_level * OVERSTOCK_RATIO

    @property
    def stock_status(self) -> StockStatus:
        """Classify the stock level. Checked in order; first match wins."""
        if self.is_out_of_stock:
            return StockStatus.OUT_OF_STOCK
        if self.is_critical_stock:
            return StockStatus.CRITICAL
        if self.is_low_stock:
            return StockStatus.LOW_STOCK
        if self.is_overstocked:
            return StockStatus.OVERSTOCKED
        return StockStatus.NORMAL

    @property
    def stock_percentage(self) -> int:
        """Percentage of par on hand, capped at 100 and rounded half up."""
        if self.par_level == 0:
            return 0
        percentage = min(100.0, self.current_count / self.par_level * 100)
        return int(math.floor(percentage + 0.5))

    @property
    def needs_reorder(self) -> bool:
        """Active items below par, including items that have run out."""
        return self.active and self.current_count < self.par_level

    def calculate_reorder_quantity(self) -> float:
        return max(0, self.par_level - self.current_count)

    @property
    def stock_value(self) -> Decimal:
        """Value of the quantity on hand at the current price."""
        return self.price * Decimal(str(self.current_count))

    # --- Display --------------------------------------------------------------

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def formatted_price(self) -> str:
        return format_money(self.price)

    @property
    def stock_display_text(self) -> str:
        return _STOCK_DISPLAY_TEXT[self.stock_status]

    def same_identity(self, other: Product) -> bool:
        return self.id is not None and self.id == other.id

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "active": self.active,
            "storage_location": self.storage_location,
            "inventory_category": self.inventory_category,
            "tracking_unit": self.tracking_unit.value,
            "par_level": self.par_level,
            "current_count": self.current_count,
            "default_vendor_item_id": self.default_vendor_item_id,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @staticmethod
    def from_api(data: dict[str, Any]) -> Product:
        """Build a product from its wire representation.

        Numeric fields that are missing or unparseable fall back to 0.
        """
        price = data.get("current_price_per_unit") or data.get("price")
        created_at = parse_timestamp(data.get("created_at") or data.get("createdAt"))
        updated_at = parse_timestamp(data.get("updated_at") or data.get("updatedAt"))
        return Product(
            id=data.get("id"),
            name=data.get("name") or "",
            price=parse_money(price),
            storage_location=data.get("storage_location") or "",
            inventory_category=data.get("inventory_category") or "",
            tracking_unit=data.get("tracking_unit") or TrackingUnit.EACH,
            par_level=parse_number(data.get("par_level")),
            current_count=parse_number(data.get("current_count")),
            active=data.get("active") is not False,
            default_vendor_item_id=data.get("default_vendor_item_id"),
            created_at=created_at or utc_now(),
            updated_at=updated_at or utc_now(),
        )


def _require_text(value: str | None, message: str) -> None:
    if not value or not str(value).strip():
        raise ValidationError(message)


def _require_non_negative(value: float | Decimal, message: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValidationError(message)


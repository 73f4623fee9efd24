"""Commands: plain input containers handed to the application services.

``None`` on an optional field means "leave unchanged".
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from hims.domain.model.product import TrackingUnit


@dataclass(frozen=True)
class CreateProductCommand:
    name: str
    price: Decimal | float | str
    storage_location: str
    inventory_category: str
    tracking_unit: TrackingUnit | str
    par_level: float
    current_count: float = 0
    active: bool = True
    default_vendor_item_id: int | None = None


@dataclass(frozen=True)
class UpdateProductCommand:
    id: int | str
    name: str | None = None
    price: Decimal | float | str | None = None
    storage_location: str | None = None
    inventory_category: str | None = None
    tracking_unit: TrackingUnit | str | None = None
    par_level: float | None = None
    current_count: float | None = None
    active: bool | None = None
    default_vendor_item_id: int | None = None


@dataclass(frozen=True)
class StockAdjustmentCommand:
    id: int | str
    adjustment: float
    reason: str | None = None


@dataclass(frozen=True)
class OverrideSelectionCommand:
    item_id: int | str
    vendor_item_id: int
    overridden_by: str

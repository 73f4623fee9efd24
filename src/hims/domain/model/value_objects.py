"""Value Objects describing how a vendor item was chosen.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from hims.domain.exceptions import ValidationError
from hims.domain.model.money import parse_money, to_money
from hims.domain.model.parsing import parse_number


class SelectionStrategy(Enum):
    LOWEST_PRICE = "lowest_price"
    BEST_VALUE = "best_value"
    PREFERRED_VENDOR = "preferred_vendor"
    DELIVERY_OPTIMIZATION = "delivery_optimization"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @staticmethod
    def parse(value: SelectionStrategy | str | None) -> SelectionStrategy:
        if isinstance(value, SelectionStrategy):
            return value
        if not value:
            raise ValidationError("Selection strategy is required")
        try:
            return SelectionStrategy(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown selection strategy: {value!r}") from exc


class ConfidenceLevel(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SelectionReason:
    """Why the resolver picked a vendor item, and how sure it was."""

    strategy: SelectionStrategy
    reason: str = ""
    confidence_score: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", SelectionStrategy.parse(self.strategy))
        if not 0 <= self.confidence_score <= 1:
            raise ValidationError("Confidence score must be between 0 and 1")

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy.value,
            "reason": self.reason,
            "confidence_score": self.confidence_score,
        }

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> SelectionReason:
        if not data:
            raise ValidationError("Selection reason is required")
        return SelectionReason(
            strategy=data.get("strategy"),
            reason=data.get("reason") or "",
            confidence_score=parse_number(data.get("confidence_score")),
        )


@dataclass(frozen=True)
class VendorRef:
    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class VendorItemRef:
    """A vendor catalog line as carried on an alternative."""

    id: int
    product_name: str
    price_per_case: Decimal
    vendor: VendorRef | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "price_per_case", to_money(self.price_per_case))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "product_name": self.product_name,
            "price_per_case": str(self.price_per_case),
            "vendor": self.vendor.to_dict() if self.vendor else None,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> VendorItemRef:
        vendor = data.get("vendor")
        return VendorItemRef(
            id=data.get("id"),
            product_name=data.get("product_name") or "",
            price_per_case=parse_money(data.get("price_per_case")),
            vendor=VendorRef(vendor.get("id"), vendor.get("name") or "") if vendor else None,
        )


@dataclass(frozen=True)
class Alternative:
    """A competing vendor item for an order line.

    ``cost_difference`` is relative to the currently chosen item; negative
    means the alternative is cheaper.
    """

    vendor_item_id: int
    cost_difference: Decimal
    vendor_item: VendorItemRef | None = None

    def __post_init__(self) -> None:
        if not self.vendor_item_id:
            raise ValidationError("Alternative vendor item ID is required")
        object.__setattr__(self, "cost_difference", to_money(self.cost_difference))

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendor_item_id": self.vendor_item_id,
            "cost_difference": str(self.cost_difference),
            "vendor_item": self.vendor_item.to_dict() if self.vendor_item else None,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Alternative:
        vendor_item = data.get("vendor_item")
        return Alternative(
            vendor_item_id=data.get("vendor_item_id"),
            cost_difference=parse_money(data.get("cost_difference")),
            vendor_item=VendorItemRef.from_dict(vendor_item) if vendor_item else None,
        )

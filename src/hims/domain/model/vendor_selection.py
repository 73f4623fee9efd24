"""VendorSelection aggregate: one resolved vendor choice for an order line.

A resolver outside this package evaluates the vendor items that could
fulfil a house order item, picks one, and records the candidates it
considered as ``alternatives``. A person may later override the pick, but
only with one of those already-evaluated alternatives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from hims.domain.exceptions import DomainError, ValidationError
from hims.domain.model.money import ZERO, format_money, parse_money, to_money
from hims.domain.model.timestamps import format_timestamp, parse_timestamp, utc_now
from hims.domain.model.value_objects import (
    Alternative,
    ConfidenceLevel,
    SelectionReason,
)


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
# Display tiers and the yes/no gate are separate cut lines.
HIGH_CONFIDENCE_THRESHOLD = 0.8
MEDIUM_CONFIDENCE_THRESHOLD = 0.6
CONFIDENT_SELECTION_THRESHOLD = 0.7


def confidence_level_for(score: float) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


@dataclass
class VendorSelection:
    """Aggregate root for a vendor choice.

    Override state machine::

        NOT_OVERRIDDEN --override_selection()--> OVERRIDDEN
        OVERRIDDEN     --reset_override()-----> NOT_OVERRIDDEN

    The initial state is whatever the resolver handed over.
    """

    id: int | str | None
    house_order_item_id: int
    vendor_item_id: int
    selection_reason: SelectionReason
    cost_savings: Decimal = ZERO
    alternatives: list[Alternative] = field(default_factory=list)
    is_overridden: bool = False
    overridden_by: str | None = None
    overridden_at: datetime | None = None
    house_order_id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.house_order_item_id:
            raise ValidationError("House order item ID is required")
        if not self.vendor_item_id:
            raise ValidationError("Vendor item ID is required")
        if self.selection_reason is None:
            raise ValidationError("Selection reason is required")
        self.cost_savings = _require_savings(self.cost_savings)
        self.alternatives = list(self.alternatives)

    # --- Override -------------------------------------------------------------

    def override_selection(self, vendor_item_id: int, overridden_by: str | None) -> None:
        """Switch to one of the evaluated alternatives."""
        if vendor_item_id == self.vendor_item_id:
            raise DomainError("Cannot override to the same vendor item")
        if self._find_alternative(vendor_item_id) is None:
            raise DomainError(
                f"Vendor item {vendor_item_id} is not available as an alternative"
            )
        self.vendor_item_id = vendor_item_id
        self.is_overridden = True
        self.overridden_by = overridden_by
        self.overridden_at = utc_now()
        self.touch()

    def reset_override(self) -> None:
        """Clear the override flags.

        The vendor item chosen by the override stays in place; the
        original pick is not tracked here.
        """
        if not self.is_overridden:
            raise DomainError("Selection is not overridden")
        self.is_overridden = False
        self.overridden_by = None
        self.overridden_at = None
        self.touch()

    # --- Alternatives ---------------------------------------------------------

    def add_alternative(self, alternative: Alternative) -> None:
        if self._find_alternative(alternative.vendor_item_id) is not None:
            raise DomainError(
                f"Alternative for vendor item {alternative.vendor_item_id} already exists"
            )
        self.alternatives.append(alternative)
        self.touch()

    def remove_alternative(self, vendor_item_id: int) -> None:
        alternative = self._find_alternative(vendor_item_id)
        if alternative is None:
            raise DomainError(f"Alternative for vendor item {vendor_item_id} not found")
        self.alternatives.remove(alternative)
        self.touch()

    def update_cost_savings(self, savings: Decimal | float | str) -> None:
        self.cost_savings = _require_savings(savings)
        self.touch()

    def touch(self) -> None:
        self.updated_at = utc_now()

    # --- Analysis -------------------------------------------------------------

    def best_alternative(self) -> Alternative | None:
        if not self.alternatives:
            return None
        return min(self.alternatives, key=lambda alt: alt.cost_difference)

    def worst_alternative(self) -> Alternative | None:
        if not self.alternatives:
            return None
        return max(self.alternatives, key=lambda alt: alt.cost_difference)

    @property
    def alternative_count(self) -> int:
        return len(self.alternatives)

    @property
    def has_alternatives(self) -> bool:
        return len(self.alternatives) > 0

    @property
    def confidence_score(self) -> float:
        return self.selection_reason.confidence_score

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return confidence_level_for(self.confidence_score)

    @property
    def is_confident_selection(self) -> bool:
        return self.confidence_score >= CONFIDENT_SELECTION_THRESHOLD

    @property
    def savings_percentage(self) -> Decimal:
        # Without the pre-selection cost only the absolute savings are known.
        return self.cost_savings

    # --- Display --------------------------------------------------------------

    @property
    def display_name(self) -> str:
        return f"Vendor Selection for Order Item #{self.house_order_item_id}"

    @property
    def strategy_display_name(self) -> str:
        return self.selection_reason.strategy.display_name

    @property
    def formatted_cost_savings(self) -> str:
        return format_money(self.cost_savings)

    @property
    def formatted_confidence_score(self) -> str:
        return f"{round(self.confidence_score * 100)}%"

    def same_identity(self, other: VendorSelection) -> bool:
        return self.id is not None and self.id == other.id

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "house_order_item_id": self.house_order_item_id,
            "vendor_item_id": self.vendor_item_id,
            "selection_reason": self.selection_reason.to_dict(),
            "cost_savings": str(self.cost_savings),
            "alternatives": [alt.to_dict() for alt in self.alternatives],
            "is_overridden": self.is_overridden,
            "overridden_by": self.overridden_by,
            "overridden_at": format_timestamp(self.overridden_at),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }
        if self.house_order_id is not None:
            data["house_order_id"] = self.house_order_id
        return data

    @staticmethod
    def from_api(data: dict[str, Any]) -> VendorSelection:
        created_at = parse_timestamp(data.get("created_at") or data.get("createdAt"))
        updated_at = parse_timestamp(data.get("updated_at") or data.get("updatedAt"))
        return VendorSelection(
            id=data.get("id"),
            house_order_item_id=data.get("house_order_item_id"),
            vendor_item_id=data.get("vendor_item_id"),
            selection_reason=SelectionReason.from_dict(data.get("selection_reason")),
            cost_savings=parse_money(data.get("cost_savings")),
            alternatives=[Alternative.from_dict(a) for a in data.get("alternatives") or []],
            is_overridden=bool(data.get("is_overridden")),
            overridden_by=data.get("overridden_by"),
            overridden_at=parse_timestamp(data.get("overridden_at")),
            house_order_id=data.get("house_order_id"),
            created_at=created_at or utc_now(),
            updated_at=updated_at or utc_now(),
        )

    # --- Internal helpers -----------------------------------------------------

    def _find_alternative(self, vendor_item_id: int) -> Alternative | None:
        for alternative in self.alternatives:
            if alternative.vendor_item_id == vendor_item_id:
                return alternative
        return None


def _require_savings(value: Decimal | float | str) -> Decimal:
    savings = to_money(value)
    if savings < 0:
        raise ValidationError("Cost savings cannot be negative")
    return savings

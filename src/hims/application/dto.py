"""Data Transfer Objects: read models returned by the application services.

DTOs carry aggregate figures out to the CLI (or any other caller) without
exposing the aggregates they were computed from.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal

from hims.domain.model.money import ZERO
from hims.domain.model.vendor_selection import VendorSelection


@dataclass(frozen=True)
class InventorySummary:
    total_products: int = 0
    total_value: Decimal = ZERO
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    critical_stock_count: int = 0
    overstocked_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VendorSelectionAnalysis:
    total_selections: int = 0
    overridden_selections: int = 0
    average_confidence_score: float = 0.0
    total_cost_savings: Decimal = ZERO
    strategy_distribution: dict[str, int] = field(default_factory=dict)
    confidence_distribution: dict[str, int] = field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0}
    )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SelectionRecommendations:
    low_confidence_selections: list[VendorSelection]
    high_savings_selections: list[VendorSelection]
    overridden_selections: list[VendorSelection]

    def to_dict(self) -> dict:
        return {
            "low_confidence_selections": [s.to_dict() for s in self.low_confidence_selections],
            "high_savings_selections": [s.to_dict() for s in self.high_savings_selections],
            "overridden_selections": [s.to_dict() for s in self.overridden_selections],
        }


@dataclass(frozen=True)
class SelectionValidationResult:
    errors: list[str]

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class OrderSelectionStats:
    total_items: int = 0
    selections_with_alternatives: int = 0
    overridden_selections: int = 0
    total_savings: Decimal = ZERO
    average_confidence: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

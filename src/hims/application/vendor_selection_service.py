"""Application service: vendor selection overrides and analytics.

Analytics are computed in a single pass over the selections returned by
the repository. Confidence buckets always come from the aggregate's
``confidence_level`` so they never disagree with the entity.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from hims.application.commands import OverrideSelectionCommand
from hims.application.dto import (
    OrderSelectionStats,
    SelectionRecommendations,
    SelectionValidationResult,
    VendorSelectionAnalysis,
)
from hims.domain.exceptions import DomainError, NotFoundError
from hims.domain.model.money import ZERO
from hims.domain.model.value_objects import ConfidenceLevel, SelectionStrategy
from hims.domain.model.vendor_selection import VendorSelection
from hims.domain.repository.vendor_selection_repository import (
    VendorSelectionRepository,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
HIGH_SAVINGS_THRESHOLD = Decimal("50")
MIN_VALID_CONFIDENCE = 0.5


class VendorSelectionService:

    def __init__(self, selection_repo: VendorSelectionRepository) -> None:
        self._selection_repo = selection_repo

    # --- Commands -------------------------------------------------------------

    def override_selection(self, command: OverrideSelectionCommand) -> VendorSelection:
        """Switch an order item to another evaluated vendor item.

        The repository applies the alternatives rule; it owns the
        persisted selection.
        """
        self._require(command.item_id)
        selection = self._selection_repo.override_selection(
            command.item_id, command.vendor_item_id, command.overridden_by
        )
        logger.info(
            "Order item #%s overridden to vendor item %s by %s",
            command.item_id, command.vendor_item_id, command.overridden_by,
        )
        return selection

    def reset_override(self, item_id: int | str) -> VendorSelection:
        selection = self._require(item_id)
        if not selection.is_overridden:
            raise DomainError("Selection is not overridden")
        reset = self._selection_repo.reset_override(item_id)
        logger.info("Override on order item #%s reset", item_id)
        return reset

    # --- Queries --------------------------------------------------------------

    def get_vendor_selections_for_order(self, order_id: int | str) -> list[VendorSelection]:
        return self._selection_repo.find_by_order_id(order_id)

    def get_vendor_selection_for_item(self, item_id: int | str) -> VendorSelection | None:
        return self._selection_repo.find_by_house_order_item_id(item_id)

    def get_overridden_selections(self) -> list[VendorSelection]:
        return self._selection_repo.find_overridden_selections()

    def get_selections_by_strategy(
        self, strategy: SelectionStrategy | str
    ) -> list[VendorSelection]:
        return self._selection_repo.find_selections_by_strategy(strategy)

    def get_vendor_selection_analysis(self) -> VendorSelectionAnalysis:
        selections = self._selection_repo.find_all()
        if not selections:
            return VendorSelectionAnalysis()

        overridden = 0
        confidence_total = 0.0
        savings_total = ZERO
        strategies: dict[str, int] = {}
        confidence = {level.value: 0 for level in ConfidenceLevel}

        for selection in selections:
            if selection.is_overridden:
                overridden += 1
            confidence_total += selection.confidence_score
            savings_total += selection.cost_savings
            strategy = selection.selection_reason.strategy.value
            strategies[strategy] = strategies.get(strategy, 0) + 1
            confidence[selection.confidence_level.value] += 1

        return VendorSelectionAnalysis(
            total_selections=len(selections),
            overridden_selections=overridden,
            average_confidence_score=confidence_total / len(selections),
            total_cost_savings=savings_total,
            strategy_distribution=strategies,
            confidence_distribution={
                "high": confidence["high"],
                "medium": confidence["medium"],
                "low": confidence["low"],
            },
        )

    def get_best_performing_strategy(self) -> str | None:
        """The most used strategy; ties go to the one seen first."""
        distribution = self.get_vendor_selection_analysis().strategy_distribution
        if not distribution:
            return None
        return max(distribution, key=distribution.get)

    def get_selection_recommendations(self) -> SelectionRecommendations:
        selections = self._selection_repo.find_all()
        high_savings = sorted(
            (s for s in selections if s.cost_savings > HIGH_SAVINGS_THRESHOLD),
            key=lambda s: s.cost_savings,
            reverse=True,
        )
        return SelectionRecommendations(
            low_confidence_selections=[
                s for s in selections if s.confidence_level is ConfidenceLevel.LOW
            ],
            high_savings_selections=high_savings,
            overridden_selections=[s for s in selections if s.is_overridden],
        )

    def validate_selection(self, selection: VendorSelection) -> SelectionValidationResult:
        """Run every check and collect all failures."""
        errors: list[str] = []
        if selection.confidence_score < MIN_VALID_CONFIDENCE:
            errors.append("Confidence score is too low")
        if selection.cost_savings < 0:
            errors.append("Cost savings cannot be negative")
        if not selection.alternatives:
            errors.append("No alternatives available")
        return SelectionValidationResult(errors=errors)

    def get_order_selection_stats(self, order_id: int | str) -> OrderSelectionStats:
        selections = self._selection_repo.find_by_order_id(order_id)
        if not selections:
            return OrderSelectionStats()

        return OrderSelectionStats(
            total_items=len(selections),
            selections_with_alternatives=sum(1 for s in selections if s.has_alternatives),
            overridden_selections=sum(1 for s in selections if s.is_overridden),
            total_savings=sum((s.cost_savings for s in selections), ZERO),
            average_confidence=sum(s.confidence_score for s in selections) / len(selections),
        )

    # --- Internal helpers -----------------------------------------------------

    def _require(self, item_id: int | str) -> VendorSelection:
        selection = self._selection_repo.find_by_house_order_item_id(item_id)
        if selection is None:
            logger.warning("No vendor selection for order item #%s", item_id)
            raise NotFoundError(f"Vendor selection for order item #{item_id} not found")
        return selection

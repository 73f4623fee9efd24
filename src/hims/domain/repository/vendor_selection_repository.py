"""Abstract repository for VendorSelection aggregate.

Once a selection is persisted the repository is authoritative for it, so
``override_selection`` and ``reset_override`` are repository operations.
Their default implementations load the aggregate, apply the entity's own
rules and write it back; an HTTP adapter delegates to the server instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hims.domain.exceptions import NotFoundError
from hims.domain.model.value_objects import SelectionStrategy
from hims.domain.model.vendor_selection import VendorSelection


class VendorSelectionRepository(ABC):

    @abstractmethod
    def find_by_id(self, selection_id: int | str) -> VendorSelection | None:
        """Return a selection by its ID, or None if not found."""

    @abstractmethod
    def find_all(self) -> list[VendorSelection]:
        """Return every selection."""

    @abstractmethod
    def save(self, selection: VendorSelection) -> VendorSelection:
        """Persist a new selection and return it with its assigned ID."""

    @abstractmethod
    def update(self, selection: VendorSelection) -> VendorSelection:
        """Persist changes to an existing selection."""

    @abstractmethod
    def delete(self, selection_id: int | str) -> None:
        """Remove a selection."""

    @abstractmethod
    def find_by_order_id(self, order_id: int | str) -> list[VendorSelection]:
        """Return the selections made for every line of a house order."""

    # --- Finders --------------------------------------------------------------

    def find_by_house_order_item_id(self, item_id: int | str) -> VendorSelection | None:
        for selection in self.find_all():
            if str(selection.house_order_item_id) == str(item_id):
                return selection
        return None

    def find_overridden_selections(self) -> list[VendorSelection]:
        return [s for s in self.find_all() if s.is_overridden]

    def find_selections_by_strategy(
        self, strategy: SelectionStrategy | str
    ) -> list[VendorSelection]:
        wanted = SelectionStrategy.parse(strategy)
        return [s for s in self.find_all() if s.selection_reason.strategy == wanted]

    # --- Override -------------------------------------------------------------

    def override_selection(
        self,
        item_id: int | str,
        vendor_item_id: int,
        overridden_by: str | None = None,
    ) -> VendorSelection:
        selection = self._require(item_id)
        selection.override_selection(vendor_item_id, overridden_by)
        return self.update(selection)

    def reset_override(self, item_id: int | str) -> VendorSelection:
        selection = self._require(item_id)
        selection.reset_override()
        return self.update(selection)

    def _require(self, item_id: int | str) -> VendorSelection:
        selection = self.find_by_house_order_item_id(item_id)
        if selection is None:
            raise NotFoundError(f"Vendor selection for order item #{item_id} not found")
        return selection

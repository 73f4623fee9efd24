"""JSON-file-backed implementation of VendorSelectionRepository."""

from __future__ import annotations

import logging
from pathlib import Path

from hims.domain.exceptions import NotFoundError
from hims.domain.model.vendor_selection import VendorSelection
from hims.domain.repository.vendor_selection_repository import (
    VendorSelectionRepository,
)
from hims.infrastructure.persistence.json_file_store import JsonFileStore

logger = logging.getLogger(__name__)


class JsonVendorSelectionRepository(VendorSelectionRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- VendorSelectionRepository interface ----------------------------------

    def find_by_id(self, selection_id: int | str) -> VendorSelection | None:
        records = self._store.load()
        index = self._store.index_of(records, selection_id)
        if index is None:
            return None
        return VendorSelection.from_api(records[index])

    def find_all(self) -> list[VendorSelection]:
        return [VendorSelection.from_api(raw) for raw in self._store.load()]

    def find_by_order_id(self, order_id: int | str) -> list[VendorSelection]:
        return [
            VendorSelection.from_api(raw)
            for raw in self._store.load()
            if raw.get("house_order_id") is not None
            and str(raw["house_order_id"]) == str(order_id)
        ]

    def save(self, selection: VendorSelection) -> VendorSelection:
        records = self._store.load()
        selection.id = self._store.next_id(records)
        records.append(selection.to_dict())
        self._store.persist(records)
        logger.debug("Wrote new vendor selection #%s to %s", selection.id, self._store.file_path)
        return selection

    def update(self, selection: VendorSelection) -> VendorSelection:
        records = self._store.load()
        index = self._store.index_of(records, selection.id)
        if index is None:
            raise NotFoundError(f"Vendor selection #{selection.id} not found")
        records[index] = selection.to_dict()
        self._store.persist(records)
        return selection

    def delete(self, selection_id: int | str) -> None:
        records = self._store.load()
        index = self._store.index_of(records, selection_id)
        if index is None:
            raise NotFoundError(f"Vendor selection #{selection_id} not found")
        del records[index]
        self._store.persist(records)

"""VendorSelectionRepository backed by the house-order API.

Overrides and resets go to the server, which owns the alternatives rule
once a selection is persisted.
"""

from __future__ import annotations

from hims.domain.model.vendor_selection import VendorSelection
from hims.domain.repository.vendor_selection_repository import (
    VendorSelectionRepository,
)
from hims.infrastructure.api.api_client import ApiClient, ApiError


class ApiVendorSelectionRepository(VendorSelectionRepository):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def find_by_id(self, selection_id: int | str) -> VendorSelection | None:
        try:
            data = self._client.get(f"/vendor-selections/{selection_id}")
        except ApiError as exc:
            if exc.is_not_found():
                return None
            raise
        return VendorSelection.from_api(data)

    def find_all(self) -> list[VendorSelection]:
        return [VendorSelection.from_api(item) for item in self._client.get("/vendor-selections/")]

    def save(self, selection: VendorSelection) -> VendorSelection:
        data = self._client.post("/vendor-selections/", selection.to_dict())
        return VendorSelection.from_api(data)

    def update(self, selection: VendorSelection) -> VendorSelection:
        data = self._client.put(f"/vendor-selections/{selection.id}", selection.to_dict())
        return VendorSelection.from_api(data)

    def delete(self, selection_id: int | str) -> None:
        self._client.delete(f"/vendor-selections/{selection_id}")

    def find_by_order_id(self, order_id: int | str) -> list[VendorSelection]:
        data = self._client.get(f"/house-orders/{order_id}/vendor-selections")
        return [VendorSelection.from_api(item) for item in data]

    def override_selection(
        self,
        item_id: int | str,
        vendor_item_id: int,
        overridden_by: str | None = None,
    ) -> VendorSelection:
        payload = {"vendor_item_id": vendor_item_id}
        if overridden_by:
            payload["overridden_by"] = overridden_by
        data = self._client.post(
            f"/house-orders/items/{item_id}/override-vendor-selection", payload
        )
        return VendorSelection.from_api(data)

    def reset_override(self, item_id: int | str) -> VendorSelection:
        data = self._client.post(f"/house-orders/items/{item_id}/reset-vendor-selection")
        return VendorSelection.from_api(data)

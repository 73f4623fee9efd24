"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects. Only the
abstract CRUD methods are implemented here; the finders come from the
repository base classes.
"""

from __future__ import annotations

from hims.domain.exceptions import NotFoundError
from hims.domain.model.product import Product
from hims.domain.model.vendor_selection import VendorSelection
from hims.domain.repository.product_repository import ProductRepository
from hims.domain.repository.vendor_selection_repository import (
    VendorSelectionRepository,
)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._next_id = 1
        for p in products or []:
            self._store[str(p.id)] = p
        self.stock_count_updates: list[tuple[int | str, float]] = []

    def find_by_id(self, product_id: int | str) -> Product | None:
        return self._store.get(str(product_id))

    def find_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> Product:
        while str(self._next_id) in self._store:
            self._next_id += 1
        product.id = self._next_id
        self._store[str(product.id)] = product
        return product

    def update(self, product: Product) -> Product:
        if str(product.id) not in self._store:
            raise NotFoundError(f"Product with ID '{product.id}' not found")
        self._store[str(product.id)] = product
        return product

    def delete(self, product_id: int | str) -> None:
        self._store.pop(str(product_id))

    def update_stock_count(self, product_id: int | str, new_count: float) -> Product:
        self.stock_count_updates.append((product_id, new_count))
        return super().update_stock_count(product_id, new_count)


class FakeVendorSelectionRepository(VendorSelectionRepository):

    def __init__(self, selections: list[VendorSelection] | None = None) -> None:
        self._store: dict[str, VendorSelection] = {}
        self._next_id = 1
        for s in selections or []:
            self._store[str(s.id)] = s
        self.override_calls: list[tuple[int | str, int, str | None]] = []

    def find_by_id(self, selection_id: int | str) -> VendorSelection | None:
        return self._store.get(str(selection_id))

    def find_all(self) -> list[VendorSelection]:
        return list(self._store.values())

    def find_by_order_id(self, order_id: int | str) -> list[VendorSelection]:
        return [
            s for s in self._store.values()
            if s.house_order_id is not None and str(s.house_order_id) == str(order_id)
        ]

    def save(self, selection: VendorSelection) -> VendorSelection:
        while str(self._next_id) in self._store:
            self._next_id += 1
        selection.id = self._next_id
        self._store[str(selection.id)] = selection
        return selection

    def update(self, selection: VendorSelection) -> VendorSelection:
        self._store[str(selection.id)] = selection
        return selection

    def delete(self, selection_id: int | str) -> None:
        self._store.pop(str(selection_id))

    def override_selection(
        self,
        item_id: int | str,
        vendor_item_id: int,
        overridden_by: str | None = None,
    ) -> VendorSelection:
        self.override_calls.append((item_id, vendor_item_id, overridden_by))
        return super().override_selection(item_id, vendor_item_id, overridden_by)

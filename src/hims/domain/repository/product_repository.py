"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, HTTP API, in-memory)
live in the infrastructure layer and the test suite.

Only the CRUD operations are abstract. The finders have default
implementations over ``find_all()`` that use the entity's own stock
predicates; an adapter may override any of them with a cheaper query as
long as the results agree with those predicates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hims.domain.exceptions import NotFoundError
from hims.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def find_by_id(self, product_id: int | str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every product."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new product and return it with its assigned ID."""

    @abstractmethod
    def update(self, product: Product) -> Product:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: int | str) -> None:
        """Remove a product."""

    # --- Finders --------------------------------------------------------------

    def find_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""
        for product in self.find_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def find_by_category(self, category: str) -> list[Product]:
        return [
            p for p in self.find_all()
            if p.inventory_category.lower() == category.lower()
        ]

    def find_by_storage_location(self, location: str) -> list[Product]:
        return [
            p for p in self.find_all()
            if p.storage_location.lower() == location.lower()
        ]

    def find_active_products(self) -> list[Product]:
        return [p for p in self.find_all() if p.active]

    def find_low_stock_products(self) -> list[Product]:
        return [p for p in self.find_all() if p.is_low_stock]

    def find_out_of_stock_products(self) -> list[Product]:
        return [p for p in self.find_all() if p.is_out_of_stock]

    def find_products_needing_reorder(self) -> list[Product]:
        return [p for p in self.find_all() if p.needs_reorder]

    # --- Stock count ----------------------------------------------------------

    def update_stock_count(self, product_id: int | str, new_count: float) -> Product:
        """Set the on-hand count of a product and persist it."""
        product = self._require(product_id)
        product.update_current_count(new_count)
        return self.update(product)

    def adjust_stock_count(self, product_id: int | str, adjustment: float) -> Product:
        """Apply a relative change to the on-hand count and persist it."""
        product = self._require(product_id)
        product.adjust_count(adjustment)
        return self.update(product)

    def _require(self, product_id: int | str) -> Product:
        product = self.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product

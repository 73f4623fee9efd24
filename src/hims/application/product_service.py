"""Application service: products and stock levels.

Every operation validates its input before touching the repository, and
the repository is the only I/O boundary. Stock classification is always
delegated to the Product aggregate.
"""

from __future__ import annotations

import logging
import math

from hims.application.commands import (
    CreateProductCommand,
    StockAdjustmentCommand,
    UpdateProductCommand,
)
from hims.application.dto import InventorySummary
from hims.domain.exceptions import NotFoundError, ValidationError
from hims.domain.model.money import ZERO, to_money
from hims.domain.model.product import Product, StockStatus
from hims.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Commands -------------------------------------------------------------

    def create_product(self, command: CreateProductCommand) -> Product:
        """Validate the command, then build and persist a new product.

        The product is built without an ID; the repository assigns one.
        """
        if not command.name or not command.name.strip():
            raise ValidationError("Product name is required")
        if to_money(command.price) < 0:
            raise ValidationError("Price cannot be negative")
        if not command.storage_location or not command.storage_location.strip():
            raise ValidationError("Storage location is required")
        if not command.inventory_category or not command.inventory_category.strip():
            raise ValidationError("Inventory category is required")
        if not math.isfinite(command.par_level) or command.par_level < 0:
            raise ValidationError("Par level cannot be negative")

        product = Product(
            id=None,
            name=command.name,
            price=command.price,
            storage_location=command.storage_location,
            inventory_category=command.inventory_category,
            tracking_unit=command.tracking_unit,
            par_level=command.par_level,
            current_count=command.current_count or 0,
            active=command.active,
            default_vendor_item_id=command.default_vendor_item_id,
        )
        saved = self._product_repo.save(product)
        logger.info("Created product #%s '%s'", saved.id, saved.name)
        return saved

    def update_product(self, command: UpdateProductCommand) -> Product:
        """Apply only the fields present on the command.

        Each field goes through the aggregate's own mutator, so partial
        updates get the same validation as construction.
        """
        product = self._require(command.id)

        if command.name is not None:
            product.update_name(command.name)
        if command.price is not None:
            product.update_price(command.price)
        if command.storage_location is not None:
            product.update_storage_location(command.storage_location)
        if command.inventory_category is not None:
            product.update_inventory_category(command.inventory_category)
        if command.tracking_unit is not None:
            product.update_tracking_unit(command.tracking_unit)
        if command.par_level is not None:
            product.update_par_level(command.par_level)
        if command.current_count is not None:
            product.update_current_count(command.current_count)
        if command.active is not None:
            if command.active:
                product.activate()
            else:
                product.deactivate()
        if command.default_vendor_item_id is not None:
            product.set_default_vendor_item(command.default_vendor_item_id)

        updated = self._product_repo.update(product)
        logger.info("Updated product #%s", updated.id)
        return updated

    def delete_product(self, product_id: int | str) -> None:
        self._require(product_id)
        self._product_repo.delete(product_id)
        logger.info("Deleted product #%s", product_id)

    def adjust_stock(self, command: StockAdjustmentCommand) -> Product:
        """Apply a relative stock change through the stock-count path."""
        product = self._require(command.id)

        new_count = product.current_count + command.adjustment
        _require_valid_count(new_count)

        updated = self._product_repo.update_stock_count(command.id, new_count)
        logger.info(
            "Adjusted stock of product #%s by %s to %s (reason: %s)",
            command.id, command.adjustment, new_count, command.reason or "n/a",
        )
        return updated

    def set_stock_count(self, product_id: int | str, count: float) -> Product:
        _require_valid_count(count)
        updated = self._product_repo.update_stock_count(product_id, count)
        logger.info("Set stock of product #%s to %s", product_id, count)
        return updated

    # --- Queries --------------------------------------------------------------

    def get_all_products(self) -> list[Product]:
        return self._product_repo.find_all()

    def get_product_by_id(self, product_id: int | str) -> Product | None:
        return self._product_repo.find_by_id(product_id)

    def get_products_by_category(self, category: str) -> list[Product]:
        return self._product_repo.find_by_category(category)

    def get_products_by_location(self, location: str) -> list[Product]:
        return self._product_repo.find_by_storage_location(location)

    def get_active_products(self) -> list[Product]:
        return self._product_repo.find_active_products()

    def get_low_stock_products(self) -> list[Product]:
        return self._product_repo.find_low_stock_products()

    def get_out_of_stock_products(self) -> list[Product]:
        return self._product_repo.find_out_of_stock_products()

    def get_products_needing_reorder(self) -> list[Product]:
        return self._product_repo.find_products_needing_reorder()

    def get_products_with_vendor_data(self) -> list[Product]:
        # Vendor details are not joined in yet; callers get the plain products.
        return self._product_repo.find_all()

    def get_inventory_summary(self) -> InventorySummary:
        total_products = 0
        total_value = ZERO
        counts = {status: 0 for status in StockStatus}

        for product in self._product_repo.find_all():
            total_products += 1
            total_value += product.stock_value
            counts[product.stock_status] += 1

        return InventorySummary(
            total_products=total_products,
            total_value=total_value,
            low_stock_count=counts[StockStatus.LOW_STOCK],
            out_of_stock_count=counts[StockStatus.OUT_OF_STOCK],
            critical_stock_count=counts[StockStatus.CRITICAL],
            overstocked_count=counts[StockStatus.OVERSTOCKED],
        )

    def search_products(self, query: str) -> list[Product]:
        """Case-insensitive substring match on name, category or location."""
        term = query.lower()
        return [
            p for p in self._product_repo.find_all()
            if term in p.name.lower()
            or term in p.inventory_category.lower()
            or term in p.storage_location.lower()
        ]

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: int | str) -> Product:
        product = self._product_repo.find_by_id(product_id)
        if product is None:
            logger.warning("Product #%s not found", product_id)
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product


def _require_valid_count(count: float) -> None:
    if not math.isfinite(count):
        raise ValidationError("Stock count must be a number")
    if count < 0:
        raise ValidationError("Stock count cannot be negative")

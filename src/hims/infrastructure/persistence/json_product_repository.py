"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import logging
from pathlib import Path

from hims.domain.exceptions import NotFoundError
from hims.domain.model.product import Product
from hims.domain.repository.product_repository import ProductRepository
from hims.infrastructure.persistence.json_file_store import JsonFileStore

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    def find_by_id(self, product_id: int | str) -> Product | None:
        records = self._store.load()
        index = self._store.index_of(records, product_id)
        if index is None:
            return None
        return Product.from_api(records[index])

    def find_all(self) -> list[Product]:
        return [Product.from_api(raw) for raw in self._store.load()]

    def save(self, product: Product) -> Product:
        records = self._store.load()
        product.id = self._store.next_id(records)
        records.append(product.to_dict())
        self._store.persist(records)
        logger.debug("Wrote new product #%s to %s", product.id, self._store.file_path)
        return product

    def update(self, product: Product) -> Product:
        records = self._store.load()
        index = self._store.index_of(records, product.id)
        if index is None:
            raise NotFoundError(f"Product with ID '{product.id}' not found")
        records[index] = product.to_dict()
        self._store.persist(records)
        return product

    def delete(self, product_id: int | str) -> None:
        records = self._store.load()
        index = self._store.index_of(records, product_id)
        if index is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        del records[index]
        self._store.persist(records)

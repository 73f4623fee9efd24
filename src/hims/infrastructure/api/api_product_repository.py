"""ProductRepository backed by the ``/house-items`` API."""

from __future__ import annotations

from urllib.parse import quote

from hims.domain.model.product import Product
from hims.domain.repository.product_repository import ProductRepository
from hims.infrastructure.api.api_client import ApiClient, ApiError


class ApiProductRepository(ProductRepository):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def find_by_id(self, product_id: int | str) -> Product | None:
        try:
            data = self._client.get(f"/house-items/{product_id}")
        except ApiError as exc:
            if exc.is_not_found():
                return None
            raise
        return Product.from_api(data)

    def find_all(self) -> list[Product]:
        return [Product.from_api(item) for item in self._client.get("/house-items/")]

    def save(self, product: Product) -> Product:
        return Product.from_api(self._client.post("/house-items/", product.to_dict()))

    def update(self, product: Product) -> Product:
        data = self._client.put(f"/house-items/{product.id}", product.to_dict())
        return Product.from_api(data)

    def delete(self, product_id: int | str) -> None:
        self._client.delete(f"/house-items/{product_id}")

    def find_by_storage_location(self, location: str) -> list[Product]:
        data = self._client.get(f"/inventories/location/{quote(location, safe='')}")
        return [Product.from_api(item) for item in data]

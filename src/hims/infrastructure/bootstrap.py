"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions, and services receive
their repository through the constructor.
"""

from __future__ import annotations

from hims.application.product_service import ProductService
from hims.application.vendor_selection_service import VendorSelectionService
from hims.domain.repository.product_repository import ProductRepository
from hims.domain.repository.vendor_selection_repository import (
    VendorSelectionRepository,
)
from hims.infrastructure.api.api_client import ApiClient
from hims.infrastructure.api.api_product_repository import ApiProductRepository
from hims.infrastructure.api.api_vendor_selection_repository import (
    ApiVendorSelectionRepository,
)
from hims.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from hims.infrastructure.persistence.json_vendor_selection_repository import (
    JsonVendorSelectionRepository,
)
from hims.infrastructure.settings import Settings


def api_client(settings: Settings) -> ApiClient:
    return ApiClient(
        base_url=settings.api_base_url,
        token=settings.api_token,
        timeout=settings.api_timeout,
    )


def product_repository(settings: Settings) -> ProductRepository:
    if settings.backend == "api":
        return ApiProductRepository(api_client(settings))
    return JsonProductRepository(settings.data_dir / "products.json")


def vendor_selection_repository(settings: Settings) -> VendorSelectionRepository:
    if settings.backend == "api":
        return ApiVendorSelectionRepository(api_client(settings))
    return JsonVendorSelectionRepository(settings.data_dir / "vendor_selections.json")


def product_service(settings: Settings) -> ProductService:
    return ProductService(product_repository(settings))


def vendor_selection_service(settings: Settings) -> VendorSelectionService:
    return VendorSelectionService(vendor_selection_repository(settings))

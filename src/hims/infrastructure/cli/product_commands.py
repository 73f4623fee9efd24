"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from hims.application.commands import CreateProductCommand, UpdateProductCommand
from hims.domain.model.product import TrackingUnit
from hims.infrastructure.bootstrap import product_service
from hims.infrastructure.cli.common import (
    HANDLED_ERRORS,
    echo_product,
    echo_product_table,
)
from hims.infrastructure.settings import Settings

_UNITS = click.Choice([u.value for u in TrackingUnit])


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price per tracking unit (e.g. 1.25).")
@click.option("--location", required=True, help="Storage location.")
@click.option("--category", required=True, help="Inventory category.")
@click.option("--unit", default="each", type=_UNITS, help="Tracking unit.")
@click.option("--par", "par_level", required=True, type=float, help="Par level.")
@click.option("--count", "current_count", default=0.0, type=float, help="Quantity on hand.")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    price: str,
    location: str,
    category: str,
    unit: str,
    par_level: float,
    current_count: float,
) -> None:
    """Add a new house item."""
    command = CreateProductCommand(
        name=name,
        price=price,
        storage_location=location,
        inventory_category=category,
        tracking_unit=unit,
        par_level=par_level,
        current_count=current_count,
    )
    try:
        product = product_service(settings).create_product(command)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.formatted_price}")


@click.command("list")
@click.option("--category", default=None, help="Only this inventory category.")
@click.option("--location", default=None, help="Only this storage location.")
@click.option("--active-only", is_flag=True, help="Hide inactive products.")
@click.pass_obj
def product_list(
    settings: Settings, category: str | None, location: str | None, active_only: bool
) -> None:
    """List house items."""
    service = product_service(settings)
    try:
        if category:
            products = service.get_products_by_category(category)
        elif location:
            products = service.get_products_by_location(location)
        elif active_only:
            products = service.get_active_products()
        else:
            products = service.get_all_products()
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return
    echo_product_table(products)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Show a single house item."""
    try:
        product = product_service(settings).get_product_by_id(product_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))
    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    echo_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 1.40).")
@click.option("--location", default=None, help="New storage location.")
@click.option("--category", default=None, help="New inventory category.")
@click.option("--unit", default=None, type=_UNITS, help="New tracking unit.")
@click.option("--par", "par_level", default=None, type=float, help="New par level.")
@click.option("--active/--inactive", default=None, help="Activate or deactivate.")
@click.option("--vendor-item", "vendor_item_id", default=None, type=int,
              help="Default vendor item ID.")
@click.pass_obj
def product_update(
    settings: Settings,
    product_id: str,
    name: str | None,
    price: str | None,
    location: str | None,
    category: str | None,
    unit: str | None,
    par_level: float | None,
    active: bool | None,
    vendor_item_id: int | None,
) -> None:
    """Update fields of a house item."""
    command = UpdateProductCommand(
        id=product_id,
        name=name,
        price=price,
        storage_location=location,
        inventory_category=category,
        tracking_unit=unit,
        par_level=par_level,
        active=active,
        default_vendor_item_id=vendor_item_id,
    )
    try:
        product = product_service(settings).update_product(command)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Delete a house item."""
    try:
        product_service(settings).delete_product(product_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")


@click.command("search")
@click.argument("query")
@click.pass_obj
def product_search(settings: Settings, query: str) -> None:
    """Find products by name, category or location."""
    try:
        products = product_service(settings).search_products(query)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo(f"No products match '{query}'.")
        return
    echo_product_table(products)

"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from hims.domain.exceptions import DomainException
from hims.domain.model.product import Product
from hims.infrastructure.api.api_client import ApiError

# Errors a command reports as a one-line message instead of a traceback.
HANDLED_ERRORS = (DomainException, ApiError)


def echo_product_table(products: list[Product]) -> None:
    click.echo(
        f"{'ID':<6} {'Name':<24} {'Location':<14} {'Count':>8} {'Par':>8} {'Price':>10}  Status"
    )
    click.echo("-" * 88)
    for p in products:
        click.echo(
            f"{str(p.id):<6} {p.name:<24} {p.storage_location:<14} "
            f"{p.current_count:>8} {p.par_level:>8} {p.formatted_price:>10}  "
            f"{p.stock_display_text}"
        )


def echo_product(p: Product) -> None:
    click.echo(f"Product #{p.id}  {p.name}{'' if p.active else '  (inactive)'}")
    click.echo(f"Category: {p.inventory_category}")
    click.echo(f"Location: {p.storage_location}")
    click.echo(f"Price:    {p.formatted_price} per {p.tracking_unit.value}")
    click.echo(
        f"Stock:    {p.current_count} / {p.par_level} "
        f"({p.stock_percentage}%, {p.stock_display_text})"
    )
    if p.needs_reorder:
        click.echo(f"Reorder:  {p.calculate_reorder_quantity()} {p.tracking_unit.value}")
    if p.default_vendor_item_id is not None:
        click.echo(f"Default vendor item: {p.default_vendor_item_id}")

"""CLI commands for counting and reordering stock."""

from __future__ import annotations

import click

from hims.application.commands import StockAdjustmentCommand
from hims.infrastructure.bootstrap import product_service
from hims.infrastructure.cli.common import HANDLED_ERRORS
from hims.infrastructure.settings import Settings


@click.command("adjust")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--by", "adjustment", required=True, type=float,
              help="Relative change, e.g. -3 or 12.")
@click.option("--reason", default=None, help="Why the count changed.")
@click.pass_obj
def stock_adjust(
    settings: Settings, product_id: str, adjustment: float, reason: str | None
) -> None:
    """Adjust the on-hand count of a product."""
    command = StockAdjustmentCommand(id=product_id, adjustment=adjustment, reason=reason)
    try:
        product = product_service(settings).adjust_stock(command)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' now at {product.current_count} "
        f"({product.stock_display_text})"
    )


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--count", required=True, type=float, help="Counted quantity on hand.")
@click.pass_obj
def stock_set(settings: Settings, product_id: str, count: float) -> None:
    """Record a physical count for a product."""
    try:
        product = product_service(settings).set_stock_count(product_id, count)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' counted at {product.current_count}")


@click.command("summary")
@click.pass_obj
def stock_summary(settings: Settings) -> None:
    """Show inventory value and stock-status counts."""
    try:
        summary = product_service(settings).get_inventory_summary()
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:      {summary.total_products}")
    click.echo(f"Total value:   ${summary.total_value:.2f}")
    click.echo(f"Low stock:     {summary.low_stock_count}")
    click.echo(f"Critical:      {summary.critical_stock_count}")
    click.echo(f"Out of stock:  {summary.out_of_stock_count}")
    click.echo(f"Overstocked:   {summary.overstocked_count}")


@click.command("reorder")
@click.pass_obj
def stock_reorder(settings: Settings) -> None:
    """List active products below par and how much to order."""
    try:
        products = product_service(settings).get_products_needing_reorder()
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("Nothing to reorder.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'On hand':>8} {'Par':>8} {'Order':>8}  Unit")
    click.echo("-" * 66)
    for p in products:
        click.echo(
            f"{str(p.id):<6} {p.name:<24} {p.current_count:>8} {p.par_level:>8} "
            f"{p.calculate_reorder_quantity():>8}  {p.tracking_unit.value}"
        )

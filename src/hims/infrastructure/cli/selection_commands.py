"""CLI commands for the VendorSelection aggregate."""

from __future__ import annotations

import click

from hims.application.commands import OverrideSelectionCommand
from hims.domain.model.vendor_selection import VendorSelection
from hims.infrastructure.bootstrap import vendor_selection_service
from hims.infrastructure.cli.common import HANDLED_ERRORS
from hims.infrastructure.settings import Settings


def _display_selection(s: VendorSelection) -> None:
    """Shared formatting for displaying a selection."""
    click.echo(s.display_name)
    click.echo(f"Vendor item:  {s.vendor_item_id}")
    click.echo(
        f"Strategy:     {s.strategy_display_name} "
        f"(confidence {s.formatted_confidence_score}, {s.confidence_level.value})"
    )
    if s.selection_reason.reason:
        click.echo(f"Reason:       {s.selection_reason.reason}")
    click.echo(f"Savings:      {s.formatted_cost_savings}")
    if s.is_overridden:
        click.echo(f"Overridden by {s.overridden_by or 'unknown'} at {s.overridden_at}")

    if not s.has_alternatives:
        return
    click.echo()
    click.echo(f"  {'Vendor item':>11} {'Cost diff':>10}  Product / Vendor")
    click.echo(f"  {'-'*50}")
    for alt in s.alternatives:
        label = ""
        if alt.vendor_item is not None:
            label = alt.vendor_item.product_name
            if alt.vendor_item.vendor is not None:
                label += f" / {alt.vendor_item.vendor.name}"
        click.echo(f"  {alt.vendor_item_id:>11} {alt.cost_difference:>10.2f}  {label}")


@click.command("show")
@click.option("--item", "item_id", required=True, help="House order item ID.")
@click.pass_obj
def selection_show(settings: Settings, item_id: str) -> None:
    """Show the vendor selection for an order item."""
    try:
        selection = vendor_selection_service(settings).get_vendor_selection_for_item(item_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))
    if selection is None:
        raise click.ClickException(f"Vendor selection for order item #{item_id} not found")
    _display_selection(selection)


@click.command("override")
@click.option("--item", "item_id", required=True, help="House order item ID.")
@click.option("--vendor-item", "vendor_item_id", required=True, type=int,
              help="Alternative vendor item to switch to.")
@click.option("--by", "overridden_by", required=True, help="Who is overriding.")
@click.pass_obj
def selection_override(
    settings: Settings, item_id: str, vendor_item_id: int, overridden_by: str
) -> None:
    """Override a selection with one of its alternatives."""
    command = OverrideSelectionCommand(
        item_id=item_id, vendor_item_id=vendor_item_id, overridden_by=overridden_by
    )
    try:
        selection = vendor_selection_service(settings).override_selection(command)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Order item #{selection.house_order_item_id} now uses vendor item "
        f"{selection.vendor_item_id}"
    )


@click.command("reset")
@click.option("--item", "item_id", required=True, help="House order item ID.")
@click.pass_obj
def selection_reset(settings: Settings, item_id: str) -> None:
    """Clear the override flag on a selection."""
    try:
        vendor_selection_service(settings).reset_override(item_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Override on order item #{item_id} reset")


@click.command("analysis")
@click.pass_obj
def selection_analysis(settings: Settings) -> None:
    """Summarise every vendor selection."""
    service = vendor_selection_service(settings)
    try:
        analysis = service.get_vendor_selection_analysis()
        best = service.get_best_performing_strategy()
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Selections:          {analysis.total_selections}")
    click.echo(f"Overridden:          {analysis.overridden_selections}")
    click.echo(f"Average confidence:  {analysis.average_confidence_score:.2f}")
    click.echo(f"Total savings:       ${analysis.total_cost_savings:.2f}")
    click.echo(f"Most used strategy:  {best or '-'}")
    click.echo()
    click.echo("Strategies:")
    for strategy, count in analysis.strategy_distribution.items():
        click.echo(f"  {strategy:<24} {count:>5}")
    click.echo("Confidence:")
    for level, count in analysis.confidence_distribution.items():
        click.echo(f"  {level:<24} {count:>5}")


@click.command("recommendations")
@click.pass_obj
def selection_recommendations(settings: Settings) -> None:
    """List selections worth a second look."""
    try:
        recs = vendor_selection_service(settings).get_selection_recommendations()
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    sections = (
        ("Low confidence", recs.low_confidence_selections),
        ("High savings", recs.high_savings_selections),
        ("Overridden", recs.overridden_selections),
    )
    for title, selections in sections:
        click.echo(f"{title} ({len(selections)}):")
        for s in selections:
            click.echo(
                f"  item #{s.house_order_item_id:<8} vendor item {s.vendor_item_id:<8} "
                f"{s.formatted_confidence_score:>5} {s.formatted_cost_savings:>10}"
            )


@click.command("stats")
@click.option("--order", "order_id", required=True, help="House order ID.")
@click.pass_obj
def selection_stats(settings: Settings, order_id: str) -> None:
    """Show selection statistics for one house order."""
    try:
        stats = vendor_selection_service(settings).get_order_selection_stats(order_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id}")
    click.echo(f"Items:               {stats.total_items}")
    click.echo(f"With alternatives:   {stats.selections_with_alternatives}")
    click.echo(f"Overridden:          {stats.overridden_selections}")
    click.echo(f"Total savings:       ${stats.total_savings:.2f}")
    click.echo(f"Average confidence:  {stats.average_confidence:.2f}")


@click.command("validate")
@click.option("--item", "item_id", required=True, help="House order item ID.")
@click.pass_obj
def selection_validate(settings: Settings, item_id: str) -> None:
    """Check a selection against the quality rules."""
    service = vendor_selection_service(settings)
    try:
        selection = service.get_vendor_selection_for_item(item_id)
    except HANDLED_ERRORS as exc:
        raise click.ClickException(str(exc))
    if selection is None:
        raise click.ClickException(f"Vendor selection for order item #{item_id} not found")

    result = service.validate_selection(selection)
    if result.is_valid:
        click.echo(f"Order item #{item_id}: selection is valid")
        return
    click.echo(f"Order item #{item_id}: {len(result.errors)} problem(s)")
    for error in result.errors:
        click.echo(f"  - {error}")

import click

from hims.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_search,
    product_show,
    product_update,
)
from hims.infrastructure.cli.selection_commands import (
    selection_analysis,
    selection_override,
    selection_recommendations,
    selection_reset,
    selection_show,
    selection_stats,
    selection_validate,
)
from hims.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_reorder,
    stock_set,
    stock_summary,
)
from hims.infrastructure.logging_config import setup_logging
from hims.infrastructure.settings import load_settings


@click.group()
@click.option(
    "--settings", "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a settings.toml file.",
)
@click.pass_context
def cli(ctx: click.Context, settings_path: str | None) -> None:
    """HIMS: house inventory management."""
    try:
        settings = load_settings(settings_path)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    setup_logging(log_file=settings.log_file, level=settings.log_level)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage house items."""


@cli.group()
def stock() -> None:
    """Count and reorder stock."""


@cli.group()
def selection() -> None:
    """Review and override vendor selections."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_update)
stock.add_command(stock_adjust)
stock.add_command(stock_reorder)
stock.add_command(stock_set)
stock.add_command(stock_summary)
selection.add_command(selection_analysis)
selection.add_command(selection_override)
selection.add_command(selection_recommendations)
selection.add_command(selection_reset)
selection.add_command(selection_show)
selection.add_command(selection_stats)
selection.add_command(selection_validate)

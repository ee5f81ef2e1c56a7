import click

from orderdesk.infrastructure.bootstrap import build_container
from orderdesk.infrastructure.cli.order_commands import (
    order_add_product,
    order_apply_coupon,
    order_cancel,
    order_complete,
    order_make,
    order_pay,
    order_ship,
    order_show,
    order_status,
    order_submit,
)
from orderdesk.infrastructure.cli.product_commands import product_list
from orderdesk.infrastructure.cli.shipment_commands import shipment_advance, shipment_status
from orderdesk.infrastructure.config import load_settings
from orderdesk.infrastructure.logging import setup_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """orderdesk: purchase order fulfillment."""
    if ctx.obj is None:
        settings = load_settings()
        setup_logging(settings.log_level, settings.log_format)
        ctx.obj = build_container(settings)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def shipment() -> None:
    """Track shipments."""


# Register subcommands
order.add_command(order_make)
order.add_command(order_add_product)
order.add_command(order_apply_coupon)
order.add_command(order_submit)
order.add_command(order_pay)
order.add_command(order_status)
order.add_command(order_show)
order.add_command(order_cancel)
order.add_command(order_ship)
order.add_command(order_complete)
product.add_command(product_list)
shipment.add_command(shipment_status)
shipment.add_command(shipment_advance)

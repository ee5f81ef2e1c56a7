"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.dto import OrderDTO, PaymentRequest
from orderdesk.infrastructure.bootstrap import Container
from orderdesk.infrastructure.cli.errors import reported_errors

_order_id = click.option("--id", "order_id", required=True, help="Order ID.")
_admin_id = click.option("--admin", "admin_id", required=True, help="Admin handling the order.")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} ({dto.customer_id})")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipping_id:
        click.echo(f"Shipping: {dto.shipping_id}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.price:>20}")
    if dto.coupon_code:
        click.echo(f"  {'Coupon ' + dto.coupon_code:<27} {dto.price_after_reduction:>20}")


@click.command("make")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def order_make(container: Container, customer_id: str) -> None:
    """Open a new, empty order."""
    with reported_errors():
        dto = container.service.make_order.handle(customer_id, container.deadline())
    click.echo(f"Order {dto.id} created  (status={dto.status})")


@click.command("add-product")
@_order_id
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Quantity wanted.")
@click.pass_obj
def order_add_product(container: Container, order_id: str, product_id: str, quantity: int) -> None:
    """Put a product in the cart (replaces the quantity if already there)."""
    with reported_errors():
        dto = container.service.add_product.handle(
            order_id, product_id, quantity, container.deadline()
        )
    _display_order(dto)


@click.command("apply-coupon")
@_order_id
@click.option("--code", required=True, help="Coupon code.")
@click.pass_obj
def order_apply_coupon(container: Container, order_id: str, code: str) -> None:
    """Apply a discount coupon, replacing any earlier one."""
    with reported_errors():
        dto = container.service.apply_coupon.handle(order_id, code, container.deadline())
    _display_order(dto)


@click.command("submit")
@_order_id
@click.pass_obj
def order_submit(container: Container, order_id: str) -> None:
    """Submit an open order (reserves stock, redeems the coupon)."""
    with reported_errors():
        container.service.submit_order.handle(order_id, container.deadline())
    click.echo(f"Order {order_id} submitted, stock reserved.")


@click.command("pay")
@_order_id
@click.option("--kind", default="BANK_TRANSFER", show_default=True, help="Payment type.")
@click.option("--holder", required=True, help="Name of the account holder.")
@click.option("--identifier", required=True, help="Transfer reference.")
@click.option("--proof", required=True, help="Base64 encoded payment proof.")
@click.pass_obj
def order_pay(
    container: Container,
    order_id: str,
    kind: str,
    holder: str,
    identifier: str,
    proof: str,
) -> None:
    """Pay a submitted order."""
    request = PaymentRequest(kind=kind, holder_name=holder, identifier=identifier, proof=proof)
    with reported_errors():
        container.service.make_payment.handle(order_id, request, container.deadline())
    click.echo(f"Order {order_id} paid.")


@click.command("status")
@_order_id
@click.pass_obj
def order_status(container: Container, order_id: str) -> None:
    """Show the status of an order."""
    with reported_errors():
        status = container.service.check_order_status.handle(order_id, container.deadline())
    click.echo(status.value)


@click.command("show")
@_order_id
@click.pass_obj
def order_show(container: Container, order_id: str) -> None:
    """Show details of an existing order."""
    with reported_errors():
        dto = container.service.show_order.handle(order_id, container.deadline())
    _display_order(dto)


@click.command("cancel")
@_order_id
@_admin_id
@click.pass_obj
def order_cancel(container: Container, order_id: str, admin_id: str) -> None:
    """Cancel an order (releases stock and coupon if it was submitted)."""
    with reported_errors():
        container.service.cancel_order.handle(order_id, admin_id, container.deadline())
    click.echo(f"Order {order_id} cancelled.")


@click.command("ship")
@_order_id
@_admin_id
@click.pass_obj
def order_ship(container: Container, order_id: str, admin_id: str) -> None:
    """Hand a paid order to the logistics partner."""
    with reported_errors():
        shipping_id = container.service.ship_order.handle(
            order_id, admin_id, container.deadline()
        )
    click.echo(f"Order {order_id} shipped with shipping ID {shipping_id}")


@click.command("complete")
@_order_id
@_admin_id
@click.pass_obj
def order_complete(container: Container, order_id: str, admin_id: str) -> None:
    """Complete a delivered order."""
    with reported_errors():
        container.service.complete_order.handle(order_id, admin_id, container.deadline())
    click.echo(f"Order {order_id} completed.")

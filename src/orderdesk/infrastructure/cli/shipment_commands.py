"""CLI commands for shipments held by the logistics partner."""

from __future__ import annotations

import click

from orderdesk.domain.model.shipment import ShipmentStatus
from orderdesk.infrastructure.bootstrap import Container
from orderdesk.infrastructure.cli.errors import reported_errors


@click.command("status")
@click.option("--shipping-id", required=True, help="Shipping ID returned by 'order ship'.")
@click.pass_obj
def shipment_status(container: Container, shipping_id: str) -> None:
    """Ask the logistics partner where a parcel is."""
    with reported_errors():
        status = container.service.check_shipment_status.handle(
            shipping_id, container.deadline()
        )
    click.echo(f"Shipment {shipping_id}: {status.value}")


@click.command("advance")
@click.option("--shipping-id", required=True, help="Shipping ID returned by 'order ship'.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in ShipmentStatus], case_sensitive=False),
    help="New shipment status.",
)
@click.pass_obj
def shipment_advance(container: Container, shipping_id: str, new_status: str) -> None:
    """Play the logistics partner and move a parcel along."""
    status = ShipmentStatus(new_status.upper())
    with reported_errors():
        container.logistics.update_shipment_status(shipping_id, status, container.deadline())
    click.echo(f"Shipment {shipping_id} is now {status.value}")

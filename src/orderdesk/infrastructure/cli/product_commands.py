"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from orderdesk.infrastructure.bootstrap import Container
from orderdesk.infrastructure.cli.errors import reported_errors


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products with their available stock."""
    with reported_errors():
        lines = container.service.list_products.handle(container.deadline())

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Price':>10} {'Available':>10}")
    click.echo("-" * 55)
    for p in lines:
        click.echo(f"{p.id:<12} {p.name:<20} {p.price:>10} {p.available:>10}")

"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.application.list_menu import ListMenuHandler
from storefront.infrastructure.bootstrap import catalog_repository


@click.command("list")
def menu_list() -> None:
    """List menu items with their variants and add-ons."""
    handler = ListMenuHandler(catalog_repo=catalog_repository())
    items = handler.handle()

    if not items:
        click.echo("No menu items found.")
        return

    click.echo(f"{'ID':<12} {'Name':<24} {'Price':>10}")
    click.echo("-" * 48)
    for item in items:
        click.echo(f"{item.id:<12} {item.name:<24} {item.price:>10}")
        for variant in item.variants:
            click.echo(f"    variant {variant}")
        for addon in item.addons:
            click.echo(f"    add-on  {addon}")

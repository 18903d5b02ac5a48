import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_dec,
    cart_inc,
    cart_remove,
    cart_show,
    cart_table,
    coupon_apply,
    coupon_remove,
)
from storefront.infrastructure.cli.menu_commands import menu_list
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Storefront — cart and pricing"""
    configure_logging(verbose)


@cli.group()
def cart() -> None:
    """Manage the cart of a storefront."""


@cart.group()
def coupon() -> None:
    """Apply or remove the cart coupon."""


@cli.group()
def menu() -> None:
    """Browse the menu."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_dec)
cart.add_command(cart_inc)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_table)
coupon.add_command(coupon_apply)
coupon.add_command(coupon_remove)
menu.add_command(menu_list)

"""CLI commands for the Cart aggregate.

Every command opens the cart of one storefront (``--store`` or the
``STOREFRONT_ID`` environment variable), applies one change and prints
the resulting cart. Lines are addressed by their position as shown by
``cart show``.
"""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.apply_coupon import ApplyCouponHandler
from storefront.application.cart_store import CartStore
from storefront.application.dto import CartDTO, LineSpec
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_store,
    catalog_repository,
    coupon_repository,
)

store_option = click.option(
    "--store",
    "storefront_id",
    required=True,
    envvar="STOREFRONT_ID",
    help="Storefront identifier (or STOREFRONT_ID).",
)
line_option = click.option(
    "--line", "line_no", required=True, type=int, help="Line number as shown by 'cart show'."
)


def _open_store(storefront_id: str) -> CartStore:
    """Hydrate the cart and reinstate a restored coupon if it is still valid."""
    store = cart_store(storefront_id)
    ApplyCouponHandler(coupon_repo=coupon_repository(), store=store).revalidate()
    return store


def _line_id(store: CartStore, line_no: int) -> str:
    items = store.items
    if not 1 <= line_no <= len(items):
        raise click.BadParameter(
            f"No line {line_no} in the cart (it has {len(items)}).", param_hint="--line"
        )
    return items[line_no - 1].line_id


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart for {dto.storefront_id}")
    if dto.table_label:
        click.echo(f"Table:  {dto.table_label}")
    if dto.coupon_code:
        click.echo(f"Coupon: {dto.coupon_code}")
    click.echo()

    if not dto.items:
        click.echo("  (empty)")
        return

    click.echo(f"  {'#':>3} {'Item':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for no, item in enumerate(dto.items, start=1):
        click.echo(
            f"  {no:>3} {item.product_name:<28} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
        details = []
        if item.variant_name:
            details.append(item.variant_name)
        details.extend(f"+ {name}" for name in item.addon_names)
        if item.notes:
            details.append(f'"{item.notes}"')
        for detail in details:
            click.echo(f"      {detail}")
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Items':<33} {dto.item_count:>5}")
    click.echo(f"  {'Subtotal':<39} {dto.subtotal:>20}")
    if dto.discount != "$0.00":
        click.echo(f"  {'Discount':<39} {'-' + dto.discount:>20}")
    click.echo(f"  {'Total':<39} {dto.total:>20}")


@click.command("show")
@store_option
def cart_show(storefront_id: str) -> None:
    """Show the cart and its totals."""
    store = _open_store(storefront_id)
    _display_cart(ShowCartHandler(store).handle())


@click.command("add")
@store_option
@click.option("--product", required=True, help="Product ID.")
@click.option("--variant", default=None, help="Variant ID (defaults to the product's default).")
@click.option("--addon", "addons", multiple=True, help="Add-on ID; repeat for several.")
@click.option("--notes", default="", help="Special instructions.")
@click.option("--qty", default=1, type=int, show_default=True, help="Quantity to add.")
def cart_add(
    storefront_id: str,
    product: str,
    variant: str | None,
    addons: tuple[str, ...],
    notes: str,
    qty: int,
) -> None:
    """Add a configured product to the cart."""
    store = _open_store(storefront_id)
    handler = AddToCartHandler(catalog_repo=catalog_repository(), store=store)
    spec = LineSpec(
        product_id=product, variant_id=variant, addon_ids=addons, notes=notes, quantity=qty
    )

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("inc")
@store_option
@line_option
def cart_inc(storefront_id: str, line_no: int) -> None:
    """Add one unit to a line."""
    store = _open_store(storefront_id)
    store.increment_line(_line_id(store, line_no))
    _display_cart(ShowCartHandler(store).handle())


@click.command("dec")
@store_option
@line_option
def cart_dec(storefront_id: str, line_no: int) -> None:
    """Take one unit off a line (the last unit removes it)."""
    store = _open_store(storefront_id)
    store.decrement_line(_line_id(store, line_no))
    _display_cart(ShowCartHandler(store).handle())


@click.command("remove")
@store_option
@line_option
def cart_remove(storefront_id: str, line_no: int) -> None:
    """Remove a line from the cart."""
    store = _open_store(storefront_id)
    store.remove_line(_line_id(store, line_no))
    _display_cart(ShowCartHandler(store).handle())


@click.command("table")
@store_option
@click.option("--label", required=True, help="Table label; empty to unset.")
def cart_table(storefront_id: str, label: str) -> None:
    """Set the dine-in table label."""
    store = _open_store(storefront_id)
    store.set_table_label(label)
    _display_cart(ShowCartHandler(store).handle())


@click.command("clear")
@store_option
def cart_clear(storefront_id: str) -> None:
    """Empty the cart, table label and coupon."""
    store = _open_store(storefront_id)
    store.clear()
    click.echo(f"Cart for {storefront_id} cleared.")


@click.command("apply")
@store_option
@click.option("--code", required=True, help="Coupon code.")
def coupon_apply(storefront_id: str, code: str) -> None:
    """Apply a coupon, replacing any active one."""
    store = _open_store(storefront_id)
    handler = ApplyCouponHandler(coupon_repo=coupon_repository(), store=store)

    try:
        coupon = handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {coupon.code} applied.")
    _display_cart(ShowCartHandler(store).handle())


@click.command("remove")
@store_option
def coupon_remove(storefront_id: str) -> None:
    """Remove the active coupon."""
    store = _open_store(storefront_id)
    store.remove_coupon()
    _display_cart(ShowCartHandler(store).handle())

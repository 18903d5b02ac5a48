"""Domain service: Line Identity & Price Resolver.

Turns a customer's product configuration into the two things the cart
needs before it can merge or append a line:

- an identity key that is the same for equal configurations, whatever
  order the add-ons were ticked in and whatever whitespace surrounds the
  notes;
- the per-unit price: the variant price *replaces* the base price and
  each add-on price is *added* on top.

A variant or add-on id that is not in the current catalog snapshot (a
stale reference) is skipped. The line is still created, priced from what
did resolve.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from storefront.domain.model.cart import LineAddon, LineItem
from storefront.domain.model.catalog import Product, ProductOptions
from storefront.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


def line_key(
    product_id: str,
    variant_id: str | None,
    addon_ids: Iterable[str],
    notes: str | None,
) -> str:
    """Build the identity key of a cart line.

    Encoded as a compact JSON array so no id can smuggle in a separator;
    ``null`` stands for "no variant" and never equals a real id.
    """
    return json.dumps(
        [product_id, variant_id, sorted(set(addon_ids)), (notes or "").strip()],
        ensure_ascii=False,
        separators=(",", ":"),
    )


@dataclass(frozen=True)
class LineSelection:
    """What the customer picked for one product."""

    product: Product
    options: ProductOptions = field(default_factory=ProductOptions)
    variant_id: str | None = None
    addon_ids: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class ResolvedLine:
    line_id: str
    product_id: str
    display_name: str
    unit_price: Money
    variant_id: str | None
    variant_name: str | None
    addons: tuple[LineAddon, ...]
    notes: str

    def to_line_item(self, quantity: Quantity) -> LineItem:
        return LineItem(
            line_id=self.line_id,
            product_id=self.product_id,
            display_name=self.display_name,
            unit_price=self.unit_price,
            quantity=quantity,
            variant_id=self.variant_id,
            variant_name=self.variant_name,
            addons=self.addons,
            notes=self.notes,
        )


def resolve_line(selection: LineSelection) -> ResolvedLine:
    """Compute the identity key and unit price for ``selection``."""
    product = selection.product
    options = selection.options
    unit_price = product.base_price

    variant = options.find_variant(selection.variant_id)
    if variant is not None:
        unit_price = variant.price
    elif selection.variant_id is not None:
        logger.warning(
            "Variant %s not found for product %s; using base price",
            selection.variant_id,
            product.id,
        )

    addons: list[LineAddon] = []
    for addon_id in sorted(set(selection.addon_ids)):
        addon = options.find_addon(addon_id)
        if addon is None:
            logger.warning("Add-on %s not found for product %s; skipped", addon_id, product.id)
            continue
        addons.append(LineAddon(id=addon.id, name=addon.name, price=addon.price))
        unit_price = unit_price + addon.price

    notes = (selection.notes or "").strip()
    variant_id = variant.id if variant is not None else None
    key = line_key(product.id, variant_id, (a.id for a in addons), notes)
    logger.debug("Resolved %s to line %s at %s", product.id, key, unit_price)

    return ResolvedLine(
        line_id=key,
        product_id=product.id,
        display_name=product.name,
        unit_price=unit_price,
        variant_id=variant_id,
        variant_name=variant.name if variant is not None else None,
        addons=tuple(addons),
        notes=notes,
    )

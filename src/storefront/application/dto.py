"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineSpec:
    """Input: what the customer asked for (product, options, quantity)."""

    product_id: str
    variant_id: str | None = None
    addon_ids: tuple[str, ...] = ()
    notes: str = ""
    quantity: int = 1


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    line_id: str
    product_name: str
    variant_name: str | None
    addon_names: list[str]
    notes: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the whole cart with its totals."""

    storefront_id: str
    table_label: str | None
    coupon_code: str | None
    items: list[CartLineDTO]
    item_count: int
    subtotal: str
    discount: str
    total: str


@dataclass(frozen=True)
class MenuItemDTO:
    """Output: a product with its active options."""

    id: str
    name: str
    price: str
    variants: list[str] = field(default_factory=list)
    addons: list[str] = field(default_factory=list)

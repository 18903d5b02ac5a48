"""Catalog snapshot: products and their priced options.

The catalog is owned by the menu administration side of the storefront.
The cart only ever sees read-only snapshots of it, handed over by the
catalog lookup at the moment a customer configures an item.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A menu item as offered for sale."""

    id: str
    name: str
    base_price: Money


@dataclass(frozen=True)
class Variant:
    """A priced alternative of a product (e.g. size).

    Its price *replaces* the product's base price.
    """

    id: str
    name: str
    price: Money
    is_default: bool = False
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class Addon:
    """An optional extra whose price is *added* to the unit price."""

    id: str
    name: str
    price: Money
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class ProductOptions:
    """Active variants and add-ons for one product, in display order."""

    variants: tuple[Variant, ...] = field(default_factory=tuple)
    addons: tuple[Addon, ...] = field(default_factory=tuple)

    @staticmethod
    def of(variants: list[Variant], addons: list[Addon]) -> ProductOptions:
        """Keep only active entries, ordered by ``sort_order``."""
        return ProductOptions(
            variants=tuple(
                sorted((v for v in variants if v.is_active), key=lambda v: v.sort_order)
            ),
            addons=tuple(
                sorted((a for a in addons if a.is_active), key=lambda a: a.sort_order)
            ),
        )

    def find_variant(self, variant_id: str | None) -> Variant | None:
        if variant_id is None:
            return None
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    def find_addon(self, addon_id: str) -> Addon | None:
        for addon in self.addons:
            if addon.id == addon_id:
                return addon
        return None

    def default_variant(self) -> Variant | None:
        """The variant pre-selected when the customer picks none."""
        for variant in self.variants:
            if variant.is_default:
                return variant
        return self.variants[0] if self.variants else None

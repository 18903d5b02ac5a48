"""Abstract catalog lookup.

Defined in the domain layer so the domain never depends on
infrastructure. The catalog itself is maintained elsewhere; the cart
only reads products and their priced options.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import Product, ProductOptions


class CatalogRepository(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return every product on the menu."""

    @abstractmethod
    def get_options(self, product_id: str) -> ProductOptions:
        """Return active variants and add-ons; empty when the product has none."""

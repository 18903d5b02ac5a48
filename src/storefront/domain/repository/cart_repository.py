"""Abstract repository for the Cart aggregate.

Carts are scoped by storefront: two storefronts never share a slot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self, storefront_id: str) -> Cart:
        """Return the persisted cart, or an empty one if nothing usable is stored."""

    @abstractmethod
    def save(self, storefront_id: str, cart: Cart) -> None:
        """Persist the full cart state for ``storefront_id``."""

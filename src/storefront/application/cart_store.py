"""Application service: Cart Store.

The single source of truth for one customer's cart on one storefront.
Callers own the store explicitly; there is no module-level cart, so two
storefronts in the same process can never see each other's items.

Every mutation is applied synchronously, in call order, and is followed
by a write of the full cart to the storefront's slot. The slot is read
once, when the storefront id is established.
"""

from __future__ import annotations

import logging

from storefront.domain.model.cart import Cart, LineItem
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.service.line_resolver import LineSelection, resolve_line

logger = logging.getLogger(__name__)


class CartStore:

    def __init__(self, cart_repo: CartRepository, storefront_id: str = "") -> None:
        self._cart_repo = cart_repo
        self._storefront_id = ""
        self._cart = Cart()
        self.switch_storefront(storefront_id)

    # --- Storefront scope -----------------------------------------------------

    @property
    def storefront_id(self) -> str:
        return self._storefront_id

    def switch_storefront(self, storefront_id: str) -> None:
        """Drop the current cart and hydrate the one stored for ``storefront_id``.

        Switching to the same storefront keeps the in-memory cart. An empty
        id leaves an empty cart that is never persisted.
        """
        storefront_id = (storefront_id or "").strip()
        if storefront_id and storefront_id == self._storefront_id:
            return
        self._storefront_id = storefront_id
        if not storefront_id:
            self._cart = Cart()
            return
        self._cart = self._cart_repo.load(storefront_id)
        logger.debug(
            "Hydrated cart for %s with %d line(s)", storefront_id, len(self._cart.items)
        )

    # --- Read-only views ------------------------------------------------------

    @property
    def items(self) -> list[LineItem]:
        return list(self._cart.items)

    @property
    def table_label(self) -> str | None:
        return self._cart.table_label

    @property
    def active_coupon(self) -> Coupon | None:
        return self._cart.active_coupon

    @property
    def coupon_code(self) -> str | None:
        return self._cart.coupon_code

    @property
    def pending_coupon_code(self) -> str | None:
        return self._cart.pending_coupon_code

    @property
    def item_count(self) -> int:
        return self._cart.item_count

    @property
    def subtotal(self) -> Money:
        return self._cart.subtotal

    @property
    def discount(self) -> Money:
        return self._cart.discount

    @property
    def total(self) -> Money:
        return self._cart.total

    # --- Mutations ------------------------------------------------------------

    def add_item(self, selection: LineSelection, quantity: int = 1) -> LineItem | None:
        """Merge the configured product into the cart.

        A selection without a product id, or a quantity below one, is
        rejected as a no-op and returns None.
        """
        if not selection.product.id:
            logger.warning("Rejected add: selection has no product id")
            return None
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            logger.warning("Rejected add of %s: invalid quantity %r", selection.product.id, quantity)
            return None

        resolved = resolve_line(selection)
        line = self._cart.add_line(resolved.to_line_item(Quantity(quantity)))
        self._commit()
        return line

    def increment_line(self, line_id: str) -> None:
        self._cart.increment_line(line_id)
        self._commit()

    def decrement_line(self, line_id: str) -> None:
        self._cart.decrement_line(line_id)
        self._commit()

    def remove_line(self, line_id: str) -> None:
        self._cart.remove_line(line_id)
        self._commit()

    def set_table_label(self, label: str | None) -> None:
        self._cart.set_table_label(label)
        self._commit()

    def apply_coupon(self, coupon: Coupon) -> None:
        """Store ``coupon`` as-is; its guards are evaluated by the discount."""
        self._cart.apply_coupon(coupon)
        self._commit()

    def remove_coupon(self) -> None:
        self._cart.remove_coupon()
        self._commit()

    def clear(self) -> None:
        self._cart.clear()
        self._commit()

    # --- Internal helpers -----------------------------------------------------

    def _commit(self) -> None:
        if not self._storefront_id:
            return
        self._cart_repo.save(self._storefront_id, self._cart)

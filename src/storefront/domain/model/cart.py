"""Cart aggregate: the customer's basket for one storefront.

The Cart owns its line items, the table label and the active coupon.
Totals are never stored: every projection is recomputed from the current
items on each read, so they cannot go stale after a mutation.

None of the mutations raise. Unknown line ids are ignored and a line
that would reach zero units is removed instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from storefront.domain.model.coupon import Coupon
from storefront.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineAddon:
    """Snapshot of an add-on as it was priced into a line."""

    id: str
    name: str
    price: Money


@dataclass
class LineItem:
    """One distinct product configuration and its quantity.

    ``unit_price`` is locked when the line is created: it already includes
    the variant override and every add-on. Only ``quantity`` ever changes;
    a different configuration is a different line with a different
    ``line_id``.
    """

    line_id: str
    product_id: str
    display_name: str
    unit_price: Money
    quantity: Quantity
    variant_id: str | None = None
    variant_name: str | None = None
    addons: tuple[LineAddon, ...] = ()
    notes: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a storefront cart.

    ``pending_coupon_code`` holds a code restored from persistence whose
    discount rules have not been looked up again yet. It is replaced as
    soon as a coupon is applied and cleared with the coupon.
    """

    items: list[LineItem] = field(default_factory=list)
    table_label: str | None = None
    active_coupon: Coupon | None = None
    pending_coupon_code: str | None = None

    # --- Line mutations -------------------------------------------------------

    def add_line(self, line: LineItem) -> LineItem:
        """Merge ``line`` into an existing line with the same id, or append it."""
        existing = self.find_line(line.line_id)
        if existing is not None:
            existing.quantity = existing.quantity + line.quantity.value
            logger.debug("Merged into line %s (qty=%s)", existing.line_id, existing.quantity)
            return existing
        self.items.append(line)
        logger.debug("Appended line %s (qty=%s)", line.line_id, line.quantity)
        return line

    def increment_line(self, line_id: str) -> None:
        line = self.find_line(line_id)
        if line is not None:
            line.quantity = line.quantity + 1

    def decrement_line(self, line_id: str) -> None:
        """Take one unit off a line; the last unit removes the line."""
        line = self.find_line(line_id)
        if line is None:
            return
        if line.quantity.value <= 1:
            self.remove_line(line_id)
        else:
            line.quantity = Quantity(line.quantity.value - 1)

    def remove_line(self, line_id: str) -> None:
        self.items = [item for item in self.items if item.line_id != line_id]

    # --- Context and coupon ---------------------------------------------------

    def set_table_label(self, label: str | None) -> None:
        label = (label or "").strip()
        self.table_label = label or None

    def apply_coupon(self, coupon: Coupon) -> None:
        """Replace any active coupon; coupons never stack."""
        self.active_coupon = coupon
        self.pending_coupon_code = None

    def remove_coupon(self) -> None:
        self.active_coupon = None
        self.pending_coupon_code = None

    def clear(self) -> None:
        self.items = []
        self.table_label = None
        self.remove_coupon()

    # --- Computed properties --------------------------------------------------

    @property
    def coupon_code(self) -> str | None:
        if self.active_coupon is not None:
            return self.active_coupon.code
        return self.pending_coupon_code

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def discount(self) -> Money:
        if self.active_coupon is None:
            return Money.zero()
        return self.active_coupon.discount_for(self.subtotal)

    @property
    def total(self) -> Money:
        subtotal = self.subtotal
        discount = self.discount
        if discount >= subtotal:
            return Money.zero()
        return subtotal - discount

    # --- Internal helpers -----------------------------------------------------

    def find_line(self, line_id: str) -> LineItem | None:
        for item in self.items:
            if item.line_id == line_id:
                return item
        return None

"""Coupon snapshot and its discount rules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code: str) -> str:
    """Coupon codes are matched trimmed and case-insensitively."""
    return code.strip().upper()


@dataclass(frozen=True)
class Coupon:
    """A named discount rule, as returned by the coupon lookup.

    ``discount_type`` is kept as the raw string from the coupon source so
    that an unknown type survives as data and simply discounts nothing.
    For ``percentage`` coupons ``discount_value`` is a percent; for
    ``fixed`` coupons it is an amount in minor units.
    """

    code: str
    discount_type: str
    discount_value: int | float | None = None
    min_order: Money | None = None
    max_discount: Money | None = None
    is_active: bool = True
    starts_at: datetime | None = None
    expires_at: datetime | None = None
    usage_limit: int | None = None
    usage_count: int = 0

    # --- Discount arithmetic --------------------------------------------------

    def discount_for(self, subtotal: Money) -> Money:
        """Discount this coupon grants on ``subtotal``.

        Never raises: missing or nonsensical inputs discount nothing.
        """
        zero = Money.zero(subtotal.currency)
        value = self.discount_value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return zero
        if not math.isfinite(value) or value <= 0:
            return zero

        if self.min_order is not None and subtotal < self.min_order:
            return zero

        if self.discount_type == DiscountType.PERCENTAGE.value:
            discount = subtotal.percent(value)
            if self.max_discount is not None and discount > self.max_discount:
                discount = self.max_discount
            return discount

        if self.discount_type == DiscountType.FIXED.value:
            fixed = Money(int(value), subtotal.currency)
            return fixed if fixed < subtotal else subtotal

        return zero

    # --- Redemption checks ----------------------------------------------------

    def check_redeemable(self, now: datetime) -> None:
        """Raise ValidationError if the coupon cannot be used at ``now``."""
        if not self.is_active:
            raise ValidationError(f"Coupon '{self.code}' is no longer active")
        if self.starts_at is not None and now < self.starts_at:
            raise ValidationError(f"Coupon '{self.code}' is not valid yet")
        if self.expires_at is not None and self.expires_at < now:
            raise ValidationError(f"Coupon '{self.code}' has expired")
        if self.usage_limit is not None and self.usage_count >= self.usage_limit:
            raise ValidationError(f"Coupon '{self.code}' has reached its usage limit")

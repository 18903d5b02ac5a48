"""Application service: Apply Coupon use case.

The Cart Store accepts whatever coupon snapshot it is given. Looking the
code up and checking that it may be redeemed right now happens here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from storefront.application.cart_store import CartStore
from storefront.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from storefront.domain.model.coupon import Coupon, normalize_code
from storefront.domain.repository.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApplyCouponHandler:

    def __init__(
        self,
        coupon_repo: CouponRepository,
        store: CartStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._coupon_repo = coupon_repo
        self._store = store
        self._clock = clock

    def handle(self, code: str) -> Coupon:
        """Look up ``code``, check it is redeemable, and make it the active coupon."""
        coupon = self._lookup(code)
        self._store.apply_coupon(coupon)
        logger.info("Applied coupon %s to %s", coupon.code, self._store.storefront_id)
        return coupon

    def revalidate(self) -> Coupon | None:
        """Reinstate a coupon code restored from persistence.

        A code that no longer resolves to a redeemable coupon is dropped
        silently; the cart simply carries no discount.
        """
        code = self._store.pending_coupon_code
        if not code:
            return None
        try:
            coupon = self._lookup(code)
        except DomainException as exc:
            logger.info("Dropped restored coupon %s: %s", code, exc)
            self._store.remove_coupon()
            return None
        self._store.apply_coupon(coupon)
        return coupon

    # --- Internal helpers -----------------------------------------------------

    def _lookup(self, code: str) -> Coupon:
        normalized = normalize_code(code or "")
        if not normalized:
            raise ValidationError("Coupon code is required")
        coupon = self._coupon_repo.get_by_code(normalized)
        if coupon is None:
            raise EntityNotFoundError(f"Coupon not found: '{normalized}'")
        coupon.check_redeemable(self._clock())
        return coupon

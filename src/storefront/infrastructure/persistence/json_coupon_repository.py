"""JSON-file-backed implementation of CouponRepository.

File format: a list of coupons::

    [{"code": "SAVE10", "discount_type": "percentage", "discount_value": 10,
      "min_order_cents": 5000, "max_discount_cents": 1000,
      "is_active": true, "starts_at": null, "expires_at": "2026-12-31T23:59:59Z",
      "usage_limit": 100, "usage_count": 3}]
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.coupon import Coupon, normalize_code
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)


class JsonCouponRepository(CouponRepository):
    """Records without a string ``code`` are skipped. A matching record
    with unusable fields raises ValidationError, so the coupon is treated
    as unredeemable rather than breaking the cart that holds it.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CouponRepository interface -------------------------------------------

    def get_by_code(self, code: str) -> Coupon | None:
        wanted = normalize_code(code)
        for raw in self._load_raw():
            if not isinstance(raw, dict) or not isinstance(raw.get("code"), str):
                continue
            if normalize_code(raw["code"]) == wanted:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Coupon:
        code = normalize_code(raw["code"])
        discount_type = raw.get("discount_type")
        if not isinstance(discount_type, str):
            raise ValidationError(f"Coupon '{code}' has no discount type")
        min_order = raw.get("min_order_cents")
        max_discount = raw.get("max_discount_cents")
        return Coupon(
            code=code,
            discount_type=discount_type,
            discount_value=raw.get("discount_value"),
            min_order=Money(min_order) if min_order else None,
            max_discount=Money(max_discount) if max_discount else None,
            is_active=raw.get("is_active", True),
            starts_at=_parse_timestamp(code, raw.get("starts_at")),
            expires_at=_parse_timestamp(code, raw.get("expires_at")),
            usage_limit=_optional_count(code, raw.get("usage_limit")),
            usage_count=_optional_count(code, raw.get("usage_count")) or 0,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Unreadable coupon file %s: %s", self._file_path, exc)
            return []
        if not isinstance(records, list):
            logger.warning("Coupon file %s is not a JSON list", self._file_path)
            return []
        return records

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _parse_timestamp(code: str, value) -> datetime | None:
    """ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Coupon '{code}' has an invalid date: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_count(code: str, value) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Coupon '{code}' has an invalid usage count: {value!r}")
    return value

"""CartRepository over a durable key-value slot.

Each storefront gets its own slot, ``cart:<storefront_id>:v2``; the
version suffix keeps older snapshot formats from ever being read as the
current one. The snapshot uses the same field names as the web
storefront::

    {"items": [{"cart_id", "menu_item_id", "name", "price_cents",
                "quantity", "variant_id", "variant_name",
                "addons": [{"id", "name", "price_cents"}], "notes"}],
     "tableLabel": ..., "couponCode": ...}

Only the coupon *code* is stored. Its discount rules are looked up again
after a reload, so a hydrated cart has no active coupon.

Hydration never raises: an unreadable payload gives an empty cart and an
unusable line entry is dropped while the rest of the cart loads.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from storefront.domain.model.cart import Cart, LineAddon, LineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.key_value_store import KeyValueStore
from storefront.domain.service.line_resolver import line_key

logger = logging.getLogger(__name__)


def storage_key(storefront_id: str) -> str:
    return f"cart:{storefront_id}:v2"


class KeyValueCartRepository(CartRepository):

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # --- CartRepository interface ---------------------------------------------

    def load(self, storefront_id: str) -> Cart:
        return self.from_snapshot(self._store.get(storage_key(storefront_id)))

    def save(self, storefront_id: str, cart: Cart) -> None:
        self._store.set(storage_key(storefront_id), self.to_snapshot(cart))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_snapshot(cart: Cart) -> str:
        return json.dumps(
            {
                "items": [
                    {
                        "cart_id": item.line_id,
                        "menu_item_id": item.product_id,
                        "name": item.display_name,
                        "price_cents": item.unit_price.minor_units,
                        "quantity": item.quantity.value,
                        "variant_id": item.variant_id,
                        "variant_name": item.variant_name,
                        "addons": [
                            {"id": a.id, "name": a.name, "price_cents": a.price.minor_units}
                            for a in item.addons
                        ],
                        "notes": item.notes,
                    }
                    for item in cart.items
                ],
                "tableLabel": cart.table_label,
                "couponCode": cart.coupon_code,
            },
            ensure_ascii=False,
        )

    @classmethod
    def from_snapshot(cls, raw: str | None) -> Cart:
        if not raw:
            return Cart()
        try:
            parsed = json.loads(raw)
        except (ValueError, TypeError, RecursionError) as exc:
            logger.warning("Corrupted cart snapshot, starting empty: %s", exc)
            return Cart()
        if not isinstance(parsed, dict):
            logger.warning("Cart snapshot is not an object, starting empty")
            return Cart()

        cart = Cart(
            table_label=_optional_str(parsed.get("tableLabel")),
            pending_coupon_code=_optional_str(parsed.get("couponCode")),
        )
        entries = parsed.get("items")
        if not isinstance(entries, list):
            entries = []
        for entry in entries:
            line = cls._line_from_raw(entry)
            if line is None:
                logger.warning("Dropped unusable cart entry: %r", entry)
                continue
            cart.add_line(line)
        return cart

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _line_from_raw(entry: Any) -> LineItem | None:
        if not isinstance(entry, dict):
            return None

        product_id = _identifier(entry.get("menu_item_id"))
        quantity = _whole_number(entry.get("quantity"))
        price = _whole_number(entry.get("price_cents", 0))
        if product_id is None or quantity is None or quantity < 1:
            return None
        if price is None or price < 0:
            return None

        addons: dict[str, LineAddon] = {}
        raw_addons = entry.get("addons")
        for raw_addon in raw_addons if isinstance(raw_addons, list) else []:
            addon = _addon_from_raw(raw_addon)
            if addon is not None and addon.id not in addons:
                addons[addon.id] = addon

        variant_id = _identifier(entry.get("variant_id"))
        notes = _optional_str(entry.get("notes")) or ""
        return LineItem(
            line_id=line_key(product_id, variant_id, addons.keys(), notes),
            product_id=product_id,
            display_name=entry.get("name") if isinstance(entry.get("name"), str) else "",
            unit_price=Money(price),
            quantity=Quantity(quantity),
            variant_id=variant_id,
            variant_name=_optional_str(entry.get("variant_name")) if variant_id else None,
            addons=tuple(addons.values()),
            notes=notes,
        )


def _addon_from_raw(raw: Any) -> LineAddon | None:
    if not isinstance(raw, dict):
        return None
    addon_id = _identifier(raw.get("id"))
    price = _whole_number(raw.get("price_cents", 0))
    if addon_id is None or price is None or price < 0:
        return None
    name = raw.get("name")
    return LineAddon(id=addon_id, name=name if isinstance(name, str) else "", price=Money(price))


def _identifier(value: Any) -> str | None:
    """Non-empty string id; integer ids are accepted and stringified."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _whole_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _optional_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None

"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from storefront.application.cart_store import CartStore
from storefront.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from storefront.infrastructure.persistence.json_coupon_repository import (
    JsonCouponRepository,
)
from storefront.infrastructure.persistence.json_key_value_store import (
    JsonFileKeyValueStore,
)
from storefront.infrastructure.persistence.key_value_cart_repository import (
    KeyValueCartRepository,
)

# Resolve data directory relative to the project root unless overridden.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get("STOREFRONT_DATA_DIR")
    return Path(override) if override else _DEFAULT_DATA_DIR


def catalog_repository() -> JsonCatalogRepository:
    return JsonCatalogRepository(data_dir() / "catalog.json")


def coupon_repository() -> JsonCouponRepository:
    return JsonCouponRepository(data_dir() / "coupons.json")


def cart_repository() -> KeyValueCartRepository:
    return KeyValueCartRepository(JsonFileKeyValueStore(data_dir() / "cart_slots.json"))


def cart_store(storefront_id: str) -> CartStore:
    return CartStore(cart_repository(), storefront_id)

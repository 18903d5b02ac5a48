"""JSON-file-backed implementation of CatalogRepository.

File format: a list of products, each carrying its own options::

    [{"id": "burger", "name": "Burger", "price_cents": 900,
      "variants": [{"id": "lg", "name": "Large", "price_cents": 1200,
                    "is_default": false, "sort_order": 1, "is_active": true}],
      "addons": [{"id": "cheese", "name": "Cheese", "price_cents": 150,
                  "sort_order": 0, "is_active": true}]}]
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.catalog import Addon, Product, ProductOptions, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CatalogRepository interface ------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_product(raw)
        return None

    def list_products(self) -> list[Product]:
        return [self._to_product(raw) for raw in self._load_raw()]

    def get_options(self, product_id: str) -> ProductOptions:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return ProductOptions.of(
                    [self._to_variant(v) for v in raw.get("variants", [])],
                    [self._to_addon(a) for a in raw.get("addons", [])],
                )
        return ProductOptions()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_product(raw: dict) -> Product:
        return Product(id=raw["id"], name=raw["name"], base_price=Money(raw["price_cents"]))

    @staticmethod
    def _to_variant(raw: dict) -> Variant:
        return Variant(
            id=raw["id"],
            name=raw["name"],
            price=Money(raw["price_cents"]),
            is_default=raw.get("is_default", False),
            sort_order=raw.get("sort_order", 0),
            is_active=raw.get("is_active", True),
        )

    @staticmethod
    def _to_addon(raw: dict) -> Addon:
        return Addon(
            id=raw["id"],
            name=raw["name"],
            price=Money(raw.get("price_cents", 0)),
            sort_order=raw.get("sort_order", 0),
            is_active=raw.get("is_active", True),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

"""Tests for the JSON-file repositories."""

import json
from datetime import datetime, timezone

import pytest

from storefront.application.cart_store import CartStore
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_catalog_repository import JsonCatalogRepository
from storefront.infrastructure.persistence.json_coupon_repository import JsonCouponRepository
from storefront.infrastructure.persistence.json_key_value_store import JsonFileKeyValueStore
from storefront.infrastructure.persistence.key_value_cart_repository import KeyValueCartRepository


class TestJsonFileKeyValueStore:

    def test_creates_file_on_demand(self, tmp_path):
        path = tmp_path / "nested" / "slots.json"
        JsonFileKeyValueStore(path)
        assert json.loads(path.read_text()) == {}

    def test_set_then_get(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "slots.json")
        assert store.get("k") is None
        store.set("k", "v")
        assert JsonFileKeyValueStore(tmp_path / "slots.json").get("k") == "v"
        assert not (tmp_path / "slots.json.tmp").exists()

    @pytest.mark.parametrize("content", ['{"cart:a:v2": "{}"', "", "[]", '"slots"', "[" * 200000])
    def test_unreadable_file_reads_as_empty(self, tmp_path, content):
        path = tmp_path / "slots.json"
        path.write_text(content)
        store = JsonFileKeyValueStore(path)
        assert store.get("cart:a:v2") is None

        store.set("cart:a:v2", "{}")
        assert json.loads(path.read_text()) == {"cart:a:v2": "{}"}

    def test_truncated_file_gives_empty_cart_store(self, tmp_path):
        path = tmp_path / "slots.json"
        path.write_text('{"cart:a:v2": "{}"')
        store = CartStore(KeyValueCartRepository(JsonFileKeyValueStore(path)), "a")
        assert store.items == []

        store.set_table_label("T4")
        reopened = CartStore(KeyValueCartRepository(JsonFileKeyValueStore(path)), "a")
        assert reopened.table_label == "T4"


class TestJsonCatalogRepository:

    def _write(self, path):
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "tea",
                        "name": "Tea",
                        "price_cents": 300,
                        "variants": [
                            {"id": "pot", "name": "Pot", "price_cents": 700, "sort_order": 2},
                            {"id": "cup", "name": "Cup", "price_cents": 300, "sort_order": 1},
                            {"id": "old", "name": "Old", "price_cents": 1, "is_active": False},
                        ],
                        "addons": [{"id": "milk", "name": "Milk", "price_cents": 50}],
                    },
                    {"id": "cake", "name": "Cake", "price_cents": 450},
                ]
            )
        )

    def test_get_product(self, tmp_path):
        path = tmp_path / "catalog.json"
        self._write(path)
        repo = JsonCatalogRepository(path)
        product = repo.get_product("tea")
        assert product.name == "Tea"
        assert product.base_price == Money(300)
        assert repo.get_product("coffee") is None

    def test_options_are_active_and_sorted(self, tmp_path):
        path = tmp_path / "catalog.json"
        self._write(path)
        options = JsonCatalogRepository(path).get_options("tea")
        assert [v.id for v in options.variants] == ["cup", "pot"]
        assert [a.id for a in options.addons] == ["milk"]

    def test_product_without_options(self, tmp_path):
        path = tmp_path / "catalog.json"
        self._write(path)
        repo = JsonCatalogRepository(path)
        assert repo.get_options("cake").variants == ()
        assert repo.get_options("missing").addons == ()
        assert [p.id for p in repo.list_products()] == ["tea", "cake"]


class TestJsonCouponRepository:

    def test_lookup_is_case_insensitive(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "code": "Save10",
                        "discount_type": "percentage",
                        "discount_value": 10,
                        "min_order_cents": 0,
                        "max_discount_cents": 1000,
                        "expires_at": "2026-12-31T23:59:59Z",
                        "usage_limit": None,
                        "usage_count": None,
                    }
                ]
            )
        )
        coupon = JsonCouponRepository(path).get_by_code("save10")
        assert coupon.code == "SAVE10"
        assert coupon.min_order is None
        assert coupon.max_discount == Money(1000)
        assert coupon.expires_at == datetime(2026, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        assert coupon.usage_count == 0

    def test_missing_code(self, tmp_path):
        assert JsonCouponRepository(tmp_path / "coupons.json").get_by_code("X") is None

    def test_records_without_a_code_are_skipped(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(
            json.dumps(
                [
                    "SAVE5",
                    {"discount_type": "fixed", "discount_value": 500},
                    {"code": 5, "discount_type": "fixed", "discount_value": 500},
                    {"code": "save5", "discount_type": "fixed", "discount_value": 500},
                ]
            )
        )
        assert JsonCouponRepository(path).get_by_code("SAVE5").discount_value == 500

    @pytest.mark.parametrize(
        "broken",
        [
            {"discount_type": None},
            {"expires_at": "next week"},
            {"starts_at": 20260101},
            {"usage_limit": "ten"},
            {"min_order_cents": 12.5},
        ],
    )
    def test_malformed_record_is_unredeemable(self, tmp_path, broken):
        path = tmp_path / "coupons.json"
        record = {"code": "SAVE", "discount_type": "percentage", "discount_value": 10}
        record.update(broken)
        path.write_text(json.dumps([record]))
        with pytest.raises(ValidationError):
            JsonCouponRepository(path).get_by_code("SAVE")

    @pytest.mark.parametrize("content", ["[{", "{}", "null"])
    def test_unreadable_file_has_no_coupons(self, tmp_path, content):
        path = tmp_path / "coupons.json"
        path.write_text(content)
        assert JsonCouponRepository(path).get_by_code("SAVE") is None

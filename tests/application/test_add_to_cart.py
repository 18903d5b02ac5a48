"""Integration tests for the AddToCart use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cart_store import CartStore
from storefront.application.dto import LineSpec
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import Addon, Product, ProductOptions, Variant
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.key_value_cart_repository import (
    KeyValueCartRepository,
)
from tests.fakes import FakeCatalogRepository, FakeKeyValueStore


def _setup() -> tuple[AddToCartHandler, CartStore]:
    catalog = FakeCatalogRepository(
        products=[
            Product(id="pizza", name="Pizza", base_price=Money(1000)),
            Product(id="soda", name="Soda", base_price=Money(250)),
        ],
        options={
            "pizza": ProductOptions.of(
                variants=[
                    Variant(id="s", name="Small", price=Money(800), sort_order=0),
                    Variant(id="m", name="Medium", price=Money(1100), sort_order=1, is_default=True),
                    Variant(id="l", name="Large", price=Money(1400), sort_order=2),
                ],
                addons=[
                    Addon(id="olives", name="Olives", price=Money(100)),
                    Addon(id="feta", name="Feta", price=Money(200)),
                ],
            )
        },
    )
    store = CartStore(KeyValueCartRepository(FakeKeyValueStore()), "napoli")
    return AddToCartHandler(catalog, store), store


class TestAddToCartHappyPath:

    def test_adds_configured_line(self):
        handler, _ = _setup()
        dto = handler.handle(LineSpec("pizza", variant_id="l", addon_ids=("feta", "olives")))
        assert len(dto.items) == 1
        line = dto.items[0]
        assert line.product_name == "Pizza"
        assert line.variant_name == "Large"
        assert line.unit_price == "$17.00"
        assert dto.total == "$17.00"

    def test_default_variant_when_none_chosen(self):
        handler, store = _setup()
        handler.handle(LineSpec("pizza"))
        assert store.items[0].variant_id == "m"
        assert store.subtotal == Money(1100)

    def test_default_and_explicit_choice_merge(self):
        handler, store = _setup()
        handler.handle(LineSpec("pizza"))
        handler.handle(LineSpec("pizza", variant_id="m"))
        assert len(store.items) == 1
        assert store.item_count == 2

    def test_product_without_options_uses_base_price(self):
        handler, store = _setup()
        dto = handler.handle(LineSpec("soda", quantity=3))
        assert dto.item_count == 3
        assert dto.subtotal == "$7.50"
        assert store.items[0].variant_id is None

    def test_stale_addon_skipped(self):
        handler, store = _setup()
        handler.handle(LineSpec("pizza", variant_id="s", addon_ids=("olives", "anchovy")))
        assert store.subtotal == Money(900)
        assert [a.id for a in store.items[0].addons] == ["olives"]


class TestAddToCartValidation:

    def test_unknown_product_rejected(self):
        handler, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(LineSpec("calzone"))

    def test_blank_product_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Product ID is required"):
            handler.handle(LineSpec("  "))

    def test_non_positive_quantity_rejected(self):
        handler, store = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(LineSpec("soda", quantity=0))
        assert store.items == []

"""Unit tests for line identity and unit price resolution."""

import json

from storefront.domain.model.catalog import Addon, Product, ProductOptions, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.service.line_resolver import LineSelection, line_key, resolve_line

BURGER = Product(id="burger", name="Burger", base_price=Money(900))
OPTIONS = ProductOptions.of(
    variants=[
        Variant(id="reg", name="Regular", price=Money(900), is_default=True),
        Variant(id="lg", name="Large", price=Money(1200), sort_order=1),
    ],
    addons=[
        Addon(id="cheese", name="Cheese", price=Money(150)),
        Addon(id="bacon", name="Bacon", price=Money(250), sort_order=1),
    ],
)


def _select(**kwargs) -> LineSelection:
    return LineSelection(product=BURGER, options=OPTIONS, **kwargs)


class TestLineKey:

    def test_addon_order_does_not_matter(self):
        assert line_key("p", "v", ["a", "b"], "") == line_key("p", "v", ["b", "a"], "")

    def test_notes_whitespace_is_ignored(self):
        assert line_key("p", None, [], "  extra spicy ") == line_key("p", None, [], "extra spicy")

    def test_notes_content_distinguishes_lines(self):
        assert line_key("p", None, [], "extra spicy") != line_key("p", None, [], "")

    def test_no_variant_never_collides_with_a_variant_id(self):
        assert line_key("p", None, [], "") != line_key("p", "null", [], "")
        assert line_key("p", None, [], "") != line_key("p", "novar", [], "")

    def test_separator_characters_in_ids_cannot_collide(self):
        # "a|b" as one add-on vs "a" and "b" as two
        assert line_key("p", None, ["a|b"], "") != line_key("p", None, ["a", "b"], "")
        assert line_key("p", None, ["a,b"], "") != line_key("p", None, ["a", "b"], "")

    def test_duplicate_addon_ids_collapse(self):
        assert line_key("p", None, ["a", "a"], "") == line_key("p", None, ["a"], "")

    def test_key_is_readable_json(self):
        assert json.loads(line_key("p", None, ["b", "a"], " hi ")) == ["p", None, ["a", "b"], "hi"]


class TestResolveLinePrice:

    def test_base_price_without_options(self):
        line = resolve_line(LineSelection(product=BURGER))
        assert line.unit_price == Money(900)
        assert line.variant_id is None
        assert line.addons == ()

    def test_variant_replaces_base_price(self):
        line = resolve_line(_select(variant_id="lg"))
        assert line.unit_price == Money(1200)
        assert line.variant_name == "Large"

    def test_addons_add_to_variant_price(self):
        line = resolve_line(_select(variant_id="lg", addon_ids=("cheese", "bacon")))
        assert line.unit_price == Money(1200 + 150 + 250)
        assert [a.id for a in line.addons] == ["bacon", "cheese"]

    def test_addons_add_to_base_price(self):
        line = resolve_line(_select(addon_ids=("cheese",)))
        assert line.unit_price == Money(1050)

    def test_duplicate_addon_charged_once(self):
        line = resolve_line(_select(addon_ids=("cheese", "cheese")))
        assert line.unit_price == Money(1050)
        assert len(line.addons) == 1

    def test_stale_variant_falls_back_to_base_price(self):
        line = resolve_line(_select(variant_id="gone", addon_ids=("cheese",)))
        assert line.unit_price == Money(1050)
        assert line.variant_id is None
        assert line.variant_name is None

    def test_stale_addon_is_skipped(self):
        line = resolve_line(_select(variant_id="reg", addon_ids=("cheese", "gone")))
        assert line.unit_price == Money(1050)
        assert [a.id for a in line.addons] == ["cheese"]


class TestResolveLineIdentity:

    def test_same_configuration_same_key(self):
        a = resolve_line(_select(variant_id="lg", addon_ids=("cheese", "bacon"), notes="no onion"))
        b = resolve_line(_select(variant_id="lg", addon_ids=("bacon", "cheese"), notes=" no onion "))
        assert a.line_id == b.line_id

    def test_different_variant_different_key(self):
        a = resolve_line(_select(variant_id="lg"))
        b = resolve_line(_select(variant_id="reg"))
        assert a.line_id != b.line_id

    def test_notes_are_trimmed(self):
        line = resolve_line(_select(notes="  extra spicy  "))
        assert line.notes == "extra spicy"

    def test_key_follows_resolved_selections(self):
        stale = resolve_line(_select(addon_ids=("cheese", "gone")))
        clean = resolve_line(_select(addon_ids=("cheese",)))
        assert stale.line_id == clean.line_id

"""Application service: Add To Cart use case.

Looks the product and its options up in the catalog, then hands the
selection to the Cart Store, which resolves identity and price and
merges or appends the line.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartDTO, LineSpec
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.line_resolver import LineSelection


class AddToCartHandler:

    def __init__(self, catalog_repo: CatalogRepository, store: CartStore) -> None:
        self._catalog_repo = catalog_repo
        self._store = store

    def handle(self, spec: LineSpec) -> CartDTO:
        """Add ``spec.quantity`` units of the configured product.

        When the product has variants and none was chosen, the default
        variant is selected, as the menu dialog does.
        """
        if not spec.product_id or not spec.product_id.strip():
            raise ValidationError("Product ID is required")
        if spec.quantity < 1:
            raise ValidationError("Quantity must be positive")

        product = self._catalog_repo.get_product(spec.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")

        options = self._catalog_repo.get_options(product.id)
        variant_id = spec.variant_id
        if variant_id is None:
            default = options.default_variant()
            variant_id = default.id if default is not None else None

        selection = LineSelection(
            product=product,
            options=options,
            variant_id=variant_id,
            addon_ids=tuple(spec.addon_ids),
            notes=spec.notes,
        )
        self._store.add_item(selection, quantity=spec.quantity)
        return ShowCartHandler.to_dto(self._store)

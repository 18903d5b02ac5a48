"""Application service: List Menu use case (query)."""

from __future__ import annotations

from storefront.application.dto import MenuItemDTO
from storefront.domain.repository.catalog_repository import CatalogRepository


class ListMenuHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(self) -> list[MenuItemDTO]:
        result: list[MenuItemDTO] = []
        for product in self._catalog_repo.list_products():
            options = self._catalog_repo.get_options(product.id)
            result.append(
                MenuItemDTO(
                    id=product.id,
                    name=product.name,
                    price=str(product.base_price),
                    variants=[
                        f"{v.id}: {v.name} {v.price}" + (" (default)" if v.is_default else "")
                        for v in options.variants
                    ],
                    addons=[f"{a.id}: {a.name} +{a.price}" for a in options.addons],
                )
            )
        return result

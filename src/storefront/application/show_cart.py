"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartDTO, CartLineDTO


class ShowCartHandler:

    def __init__(self, store: CartStore) -> None:
        self._store = store

    def handle(self) -> CartDTO:
        return self.to_dto(self._store)

    @staticmethod
    def to_dto(store: CartStore) -> CartDTO:
        return CartDTO(
            storefront_id=store.storefront_id,
            table_label=store.table_label,
            coupon_code=store.coupon_code,
            items=[
                CartLineDTO(
                    line_id=item.line_id,
                    product_name=item.display_name,
                    variant_name=item.variant_name,
                    addon_names=[addon.name for addon in item.addons],
                    notes=item.notes,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in store.items
            ],
            item_count=store.item_count,
            subtotal=str(store.subtotal),
            discount=str(store.discount),
            total=str(store.total),
        )

"""Cart service for the signed-in customer."""

from __future__ import annotations

from typing import Any

from storefront_client.client import StorefrontClient
from storefront_client.models.cart import AddToCartPayload, CartItem, UpdateCartItemPayload


class CartService:
    """Server-side cart operations under /customer/api/cart."""

    def __init__(self, client: StorefrontClient) -> None:
        self._client = client

    async def items(self) -> list[CartItem]:
        data = await self._client.get("/customer/api/cart")
        return [CartItem.model_validate(item) for item in data or []]

    async def count(self) -> int:
        data = await self._client.get("/customer/api/cart/count")
        if isinstance(data, dict):
            data = data.get("count", 0)
        return int(data or 0)

    async def add(self, payload: AddToCartPayload) -> Any:
        return await self._client.post("/customer/api/cart/add", body=payload.model_dump(by_alias=True))

    async def update_quantity(self, payload: UpdateCartItemPayload) -> Any:
        return await self._client.patch(
            "/customer/api/cart/update-quantity", body=payload.model_dump(by_alias=True),
        )

    async def checkout(self) -> Any:
        return await self._client.post("/customer/api/cart/checkout")


def cart_total(items: list[CartItem]) -> float:
    return round(sum(item.subtotal for item in items), 2)

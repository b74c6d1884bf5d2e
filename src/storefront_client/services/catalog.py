"""Catalog service: categories, products and product reviews."""

from __future__ import annotations

from typing import Any

from storefront_client.client import StorefrontClient
from storefront_client.models.catalog import (
    Category,
    CreateCategoryPayload,
    CreateRatingPayload,
    Product,
    ProductFilter,
    ProductPayload,
    ProductRating,
    UpdateCategoryPayload,
)


def _as_list(data: Any, key: str = "content") -> list[dict[str, Any]]:
    """Listings come back either as a bare list or as a page object."""
    if data is None:
        return []
    if isinstance(data, dict):
        return data.get(key, [])
    return data


class CategoryService:
    """Category listing and admin CRUD."""

    def __init__(self, client: StorefrontClient) -> None:
        self._client = client

    async def list(self) -> list[Category]:
        data = await self._client.get("/api/categories")
        return [Category.model_validate(c) for c in _as_list(data)]

    async def get(self, category_id: str) -> Category:
        data = await self._client.get(f"/api/categories/{category_id}")
        return Category.model_validate(data)

    async def create(self, payload: CreateCategoryPayload) -> Any:
        return await self._client.post("/api/categories", body=payload.model_dump())

    async def update(self, category_id: str, payload: UpdateCategoryPayload) -> Any:
        return await self._client.put(f"/api/categories/{category_id}", body=payload.model_dump())

    async def delete(self, category_id: str) -> Any:
        return await self._client.delete(f"/api/categories/{category_id}")


class ProductService:
    """Product browsing, reviews, and admin product management."""

    def __init__(self, client: StorefrontClient) -> None:
        self._client = client

    async def list(self, product_filter: ProductFilter | None = None) -> list[Product]:
        """List products, filtered server-side by category, search term, price or featured flag."""
        params = product_filter.to_params() if product_filter else None
        data = await self._client.get("/api/products", params=params or None)
        return [Product.model_validate(p) for p in _as_list(data)]

    async def get(self, product_id: str) -> Product:
        data = await self._client.get(f"/api/products/{product_id}")
        return Product.model_validate(data)

    async def featured(self) -> list[Product]:
        data = await self._client.get("/api/products/featured")
        return [Product.model_validate(p) for p in _as_list(data)]

    async def ratings(self, product_id: str) -> list[ProductRating]:
        data = await self._client.get(f"/api/products/{product_id}/ratings")
        return [ProductRating.model_validate(r) for r in _as_list(data)]

    async def add_rating(self, product_id: str, payload: CreateRatingPayload) -> ProductRating:
        """Post a review as the signed-in customer."""
        data = await self._client.post(
            f"/customer/api/products/{product_id}/ratings",
            body=payload.model_dump(exclude_none=True),
        )
        return ProductRating.model_validate(data)

    # ── admin ─────────────────────────────────────────────────────────

    async def create(self, payload: ProductPayload) -> Any:
        return await self._client.post(
            "/admin/api/products", body=payload.model_dump(by_alias=True, exclude_none=True),
        )

    async def update(self, product_id: str, payload: ProductPayload) -> Any:
        return await self._client.put(
            f"/admin/api/products/{product_id}",
            body=payload.model_dump(by_alias=True, exclude_none=True),
        )

    async def delete(self, product_id: str) -> Any:
        return await self._client.delete(f"/admin/api/products/{product_id}")

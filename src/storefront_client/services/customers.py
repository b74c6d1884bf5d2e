"""Customer administration service."""

from __future__ import annotations

from typing import Any

from storefront_client.client import StorefrontClient
from storefront_client.models.customers import Customer, Page, UpdateStatusPayload
from storefront_client.utils.pagination import paginate


class CustomerService:
    """Admin listing and management of customer accounts."""

    def __init__(self, client: StorefrontClient) -> None:
        self._client = client

    async def list(self, page: int = 0, size: int = 10) -> Page[Customer]:
        """Fetch one page of customers."""
        data = await self._client.get("/api/users", params={"page": page, "size": size}) or {}
        result = Page[Customer].model_validate(data)
        if not data.get("currentPage"):
            result.current_page = page
        return result

    async def list_all(self, size: int = 50, max_pages: int | None = None) -> list[Customer]:
        """Fetch every customer, page by page."""
        return await paginate(self.list, size=size, max_pages=max_pages)

    async def delete(self, customer_id: str) -> Any:
        return await self._client.delete(f"/api/users/{customer_id}")

    async def update_status(self, customer_id: str, active: bool) -> Any:
        return await self._client.patch(
            f"/api/users/{customer_id}/status",
            body=UpdateStatusPayload(active=active).model_dump(),
        )

"""Customer administration models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Customer(BaseModel):
    id: str | None = None
    email: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    role: str = "customer"
    active: bool = True

    model_config = {"populate_by_name": True, "extra": "allow"}


class UpdateStatusPayload(BaseModel):
    active: bool


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing."""
    content: list[T] = Field(default_factory=list)
    total_pages: int = Field(default=0, alias="totalPages")
    total_elements: int = Field(default=0, alias="totalElements")
    current_page: int = Field(default=0, alias="currentPage")

    model_config = {"populate_by_name": True}

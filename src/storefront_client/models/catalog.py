"""Catalog data models: categories, products, ratings."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryRef(BaseModel):
    id: str
    name: str


class Category(BaseModel):
    id: str
    name: str
    description: str = ""
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    model_config = {"populate_by_name": True}


class CreateCategoryPayload(BaseModel):
    name: str


class UpdateCategoryPayload(BaseModel):
    name: str


class Product(BaseModel):
    id: str
    name: str
    category: CategoryRef | None = None
    description: str = ""
    price: float
    image_url: str = Field(default="", alias="imageUrl")
    is_featured: bool = Field(default=False, alias="isFeatured")
    average_rating: float = Field(default=0.0, alias="averageRating")
    rating_count: int = Field(default=0, alias="ratingCount")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    model_config = {"populate_by_name": True}


class ProductFilter(BaseModel):
    """Query filters for the product listing."""
    category_id: str | None = Field(default=None, alias="categoryId")
    search_term: str | None = Field(default=None, alias="searchTerm")
    min_price: float | None = Field(default=None, alias="minPrice")
    max_price: float | None = Field(default=None, alias="maxPrice")
    featured: bool | None = None

    model_config = {"populate_by_name": True}

    def to_params(self) -> dict[str, str]:
        params = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            # Query strings carry booleans lowercase
            params[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return params


class ProductPayload(BaseModel):
    """Create/update body for admin product endpoints."""
    name: str
    category_id: str = Field(alias="categoryId")
    description: str = ""
    price: float = Field(gt=0)
    image_url: str | None = Field(default=None, alias="imageUrl")
    is_featured: bool = Field(default=False, alias="isFeatured")

    model_config = {"populate_by_name": True}


class ProductRating(BaseModel):
    id: str
    product_id: str = Field(alias="productId")
    user_id: str | None = Field(default=None, alias="userId")
    rating: int
    comment: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")

    model_config = {"populate_by_name": True}


class CreateRatingPayload(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None

"""Cart data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    product_id: str = Field(alias="productId")
    product_name: str = Field(default="", alias="productName")
    price: float = 0.0
    quantity: int = 1
    image_url: str = Field(default="", alias="imageUrl")

    model_config = {"populate_by_name": True}

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class AddToCartPayload(BaseModel):
    product_id: str = Field(alias="productId")
    quantity: int = Field(default=1, ge=1)

    model_config = {"populate_by_name": True}


class UpdateCartItemPayload(BaseModel):
    product_id: str = Field(alias="productId")
    quantity: int = Field(ge=1)

    model_config = {"populate_by_name": True}

"""Cart API schemas."""

from pydantic import BaseModel, Field

from weekly_orders.schemas.menu import SizeOptionSchema


class CartItemAdd(BaseModel):
    """Add an offering in a chosen size; size_name defaults to the offering's first size."""

    offering_id: int
    size_name: str | None = None
    quantity: int = Field(default=1, ge=1)
    browsing_day: str | None = None


class CartQuantityChange(BaseModel):
    delta: int


class CartLineResponse(BaseModel):
    line_id: str
    offering_id: int
    name: str
    description: str | None
    category: str | None
    image_url: str
    quantity: int
    selected_size: SizeOptionSchema
    line_total: int


class CartResponse(BaseModel):
    token: str
    lines: list[CartLineResponse]
    item_count: int
    total: int

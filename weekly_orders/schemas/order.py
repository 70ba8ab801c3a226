"""Order API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from weekly_orders.schemas.menu import SizeOptionSchema


class DeliveryDetails(BaseModel):
    """Customer and delivery fields; completeness is checked by the order validator."""

    customer_name: str = ""
    phone: str = ""
    province: str | None = None
    district: str | None = None
    ward: str | None = None
    address: str = ""
    delivery_date: date | None = None
    delivery_time: str = ""
    notes: str | None = None


class OrderLinePayload(BaseModel):
    """Single cart line submitted with an order."""

    offering_id: int
    name: str
    quantity: int = Field(default=1, ge=1)
    selected_size: SizeOptionSchema


class OrderCreate(DeliveryDetails):
    """Explicit order draft; total_amount is advisory and recomputed server-side."""

    lines: list[OrderLinePayload] = Field(default_factory=list)
    total_amount: int | None = None


class CheckoutRequest(DeliveryDetails):
    """Delivery details for checking out a saved cart."""


class OrderItemResponse(BaseModel):
    """Serialized order item."""

    offering_id: int | None
    name: str
    size_name: str
    servings: int
    unit_price: int
    quantity: int
    line_total: int

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Serialized order."""

    id: int
    order_number: str
    customer_name: str
    phone: str
    province: str | None
    district: str | None
    ward: str | None
    address: str
    delivery_date: date
    delivery_time: str
    delivery_week_id: str
    notes: str | None
    status: str
    total_amount: int
    items: list[OrderItemResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: str

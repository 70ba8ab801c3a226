"""Schema exports."""

from weekly_orders.schemas.cart import CartItemAdd, CartLineResponse, CartQuantityChange, CartResponse
from weekly_orders.schemas.menu import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CopyWeekRequest,
    CopyWeekResponse,
    DishCreate,
    DishResponse,
    DishUpdate,
    OfferingCreate,
    OfferingResponse,
    OfferingUpdate,
    SizeOptionSchema,
    WeekMenuResponse,
)
from weekly_orders.schemas.order import (
    CheckoutRequest,
    OrderCreate,
    OrderItemResponse,
    OrderLinePayload,
    OrderResponse,
    OrderStatusUpdate,
)
from weekly_orders.schemas.settings import LeadTimeSetting

__all__ = [
    "CartItemAdd",
    "CartLineResponse",
    "CartQuantityChange",
    "CartResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "CheckoutRequest",
    "CopyWeekRequest",
    "CopyWeekResponse",
    "DishCreate",
    "DishResponse",
    "DishUpdate",
    "LeadTimeSetting",
    "OfferingCreate",
    "OfferingResponse",
    "OfferingUpdate",
    "OrderCreate",
    "OrderItemResponse",
    "OrderLinePayload",
    "OrderResponse",
    "OrderStatusUpdate",
    "SizeOptionSchema",
    "WeekMenuResponse",
]

"""Customer cart endpoints."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weekly_orders.api.v1.endpoints.orders import find_replayed_order, submit_draft
from weekly_orders.db.session import get_db
from weekly_orders.models.menu import MenuOffering
from weekly_orders.models.order import Order
from weekly_orders.schemas.cart import CartItemAdd, CartLineResponse, CartQuantityChange, CartResponse
from weekly_orders.schemas.menu import SizeOptionSchema
from weekly_orders.schemas.order import CheckoutRequest, OrderResponse
from weekly_orders.services.cart_service import Cart, WrongDayError, delete_cart, load_cart, save_cart
from weekly_orders.services.menu_service import SizeOption, find_size, get_offering, size_options_for
from weekly_orders.services.order_validation import OrderDraft

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def _serialize_cart(token: str, cart: Cart) -> CartResponse:
    return CartResponse(
        token=token,
        lines=[
            CartLineResponse(
                line_id=line.line_id,
                offering_id=line.offering_id,
                name=line.name,
                description=line.description,
                category=line.category,
                image_url=line.image_url,
                quantity=line.quantity,
                selected_size=SizeOptionSchema(**line.selected_size.to_dict()),
                line_total=line.line_total,
            )
            for line in cart.lines
        ],
        item_count=cart.item_count(),
        total=cart.total(),
    )


@router.get("/{token}", response_model=CartResponse)
def get_cart(token: str, db: Session = Depends(get_db)) -> CartResponse:
    return _serialize_cart(token, load_cart(db, token))


@router.post("/{token}/items", response_model=CartResponse)
def add_cart_item(token: str, payload: CartItemAdd, db: Session = Depends(get_db)) -> CartResponse:
    """Add an offering in a size, merging with an existing line of the same offering and size."""
    offering: MenuOffering | None = get_offering(db, payload.offering_id)
    if offering is None or not offering.is_available:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu offering not available")

    size: SizeOption | None = (
        size_options_for(offering)[0] if payload.size_name is None else find_size(offering, payload.size_name)
    )
    if size is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown size {payload.size_name!r}")

    cart = load_cart(db, token)
    try:
        cart.add_or_merge(offering, size, payload.quantity, browsing_day=payload.browsing_day)
    except WrongDayError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_detail()) from exc
    save_cart(db, token, cart)
    return _serialize_cart(token, cart)


@router.patch("/{token}/items/{line_id}", response_model=CartResponse)
def change_cart_item_quantity(
    token: str,
    line_id: str,
    payload: CartQuantityChange,
    db: Session = Depends(get_db),
) -> CartResponse:
    """Shift a line's quantity; lines reaching zero are removed."""
    cart = load_cart(db, token)
    try:
        cart.change_quantity(line_id, payload.delta)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found") from exc
    save_cart(db, token, cart)
    return _serialize_cart(token, cart)


@router.delete("/{token}/items/{line_id}", response_model=CartResponse)
def remove_cart_item(token: str, line_id: str, db: Session = Depends(get_db)) -> CartResponse:
    cart = load_cart(db, token)
    cart.remove(line_id)
    save_cart(db, token, cart)
    return _serialize_cart(token, cart)


@router.post("/{token}/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout_cart(
    token: str,
    payload: CheckoutRequest,
    idempotency_key: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Order:
    """Validate and submit the saved cart; the cart is cleared only once the order is stored."""
    replayed: Order | None = find_replayed_order(db, idempotency_key)
    if replayed is not None:
        return replayed

    cart = load_cart(db, token)
    draft = OrderDraft(**payload.model_dump(), lines=list(cart.lines), client_total=cart.total())
    order: Order = submit_draft(db, draft, idempotency_key=idempotency_key)
    try:
        delete_cart(db, token)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Order %s stored but cart %s was not cleared", order.order_number, token)
    return order

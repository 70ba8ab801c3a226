"""Order endpoints."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from weekly_orders.db.session import get_db
from weekly_orders.models.menu import MenuOffering
from weekly_orders.models.order import Order
from weekly_orders.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from weekly_orders.services.cart_service import CartLine
from weekly_orders.services.menu_service import SizeOption, list_offerings
from weekly_orders.services.order_service import (
    OrderNotFoundError,
    PersistenceFailure,
    create_order,
    delete_order,
    get_order,
    get_order_by_idempotency_key,
    list_orders,
    update_order_status,
)
from weekly_orders.services.order_status import InvalidStatusError, StatusTransitionError
from weekly_orders.services.order_validation import OrderDraft, OrderValidationError, validate_order
from weekly_orders.services.settings_service import get_lead_time_hours
from weekly_orders.utils.time import current_local_datetime
from weekly_orders.utils.week import week_identifier

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def _get_order_or_404(db: Session, order_id: int) -> Order:
    try:
        return get_order(db, order_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc


def find_replayed_order(db: Session, idempotency_key: str | None) -> Order | None:
    """Return the order already stored for a retried request, if any."""
    if not idempotency_key:
        return None
    existing: Order | None = get_order_by_idempotency_key(db, idempotency_key)
    if existing is not None:
        logger.info("Replaying order %s for idempotency key %s", existing.order_number, idempotency_key)
    return existing


def submit_draft(db: Session, draft: OrderDraft, idempotency_key: str | None = None) -> Order:
    """Validate a draft against the live menu of its delivery week and persist it.

    A retried request whose key was already stored gets the first order back
    without being validated again.
    """
    replayed: Order | None = find_replayed_order(db, idempotency_key)
    if replayed is not None:
        return replayed

    now: datetime = current_local_datetime()
    offerings: list[MenuOffering] = []
    if draft.delivery_date is not None:
        offerings = list_offerings(db=db, week_id=week_identifier(draft.delivery_date))

    try:
        accepted = validate_order(draft, offerings, now, lead_time_hours=get_lead_time_hours(db))
    except OrderValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_detail()) from exc

    try:
        return create_order(db, accepted, idempotency_key=idempotency_key)
    except PersistenceFailure as exc:
        logger.warning("Order for %s was not stored: %s", draft.customer_name, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"kind": "PersistenceFailure", "message": str(exc)},
        ) from exc


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    payload: OrderCreate,
    idempotency_key: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Order:
    """Create an order from an explicit draft; the submitted total is advisory."""
    draft = OrderDraft(
        **payload.model_dump(exclude={"lines", "total_amount"}),
        lines=[
            CartLine(
                offering_id=line.offering_id,
                name=line.name,
                quantity=line.quantity,
                selected_size=SizeOption(**line.selected_size.model_dump()),
            )
            for line in payload.lines
        ],
        client_total=payload.total_amount,
    )
    return submit_draft(db, draft, idempotency_key=idempotency_key)


@router.get("", response_model=list[OrderResponse])
def get_orders(
    status_value: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> list[Order]:
    """Return orders newest first."""
    try:
        return list_orders(db, status=status_value)
    except InvalidStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{order_id}", response_model=OrderResponse)
def get_single_order(order_id: int, db: Session = Depends(get_db)) -> Order:
    return _get_order_or_404(db, order_id)


@router.patch("/{order_id}", response_model=OrderResponse)
def change_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)) -> Order:
    """Set the fulfilment status of an order."""
    order = _get_order_or_404(db, order_id)
    try:
        return update_order_status(db, order, payload.status)
    except InvalidStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_order(order_id: int, db: Session = Depends(get_db)) -> None:
    delete_order(db, _get_order_or_404(db, order_id))

"""Order persistence: creation from accepted drafts, listing, status updates and deletion."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from weekly_orders.core.config import settings
from weekly_orders.models.order import Order, OrderItem
from weekly_orders.services.order_status import INITIAL_STATUS, ensure_status, set_status
from weekly_orders.services.order_validation import AcceptedOrder
from weekly_orders.utils.time import utc_now

logger = logging.getLogger(__name__)


class PersistenceFailure(Exception):
    """Raised when the store did not accept a write; callers must not assume the order exists."""


class OrderNotFoundError(Exception):
    """Raised when an order id does not exist."""


def order_number_for(created_at: datetime, prefix: str | None = None) -> str:
    """Return a short human-readable token from the creation timestamp."""
    millis: int = int(created_at.timestamp() * 1000)
    return f"{settings.order_number_prefix if prefix is None else prefix}{str(millis)[-6:]}"


def _unique_order_number(db: Session, created_at: datetime) -> str:
    base: str = order_number_for(created_at)
    candidate: str = base
    suffix: int = 1
    while db.query(Order.id).filter(Order.order_number == candidate).first() is not None:
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def get_order_by_idempotency_key(db: Session, idempotency_key: str) -> Order | None:
    return db.query(Order).filter(Order.idempotency_key == idempotency_key).first()


def create_order(
    db: Session,
    accepted: AcceptedOrder,
    *,
    idempotency_key: str | None = None,
    now: datetime | None = None,
) -> Order:
    """Persist an accepted order in the initial status.

    A repeated idempotency key returns the order created by the first request.
    """
    if idempotency_key:
        existing: Order | None = get_order_by_idempotency_key(db, idempotency_key)
        if existing is not None:
            logger.info("Replaying order %s for idempotency key %s", existing.order_number, idempotency_key)
            return existing

    created_at: datetime = now or utc_now()
    draft = accepted.draft
    try:
        order = Order(
            order_number=_unique_order_number(db, created_at),
            idempotency_key=idempotency_key or None,
            customer_name=draft.customer_name.strip(),
            phone=draft.phone.strip(),
            province=draft.province,
            district=draft.district,
            ward=draft.ward,
            address=draft.address.strip(),
            delivery_date=accepted.delivery_at.date(),
            delivery_time=draft.delivery_time,
            delivery_week_id=accepted.week_id,
            notes=draft.notes,
            total_amount=accepted.total_amount,
            client_total_amount=draft.client_total,
            status=INITIAL_STATUS,
            created_at=created_at,
            updated_at=created_at,
        )
        order.items = [
            OrderItem(
                offering_id=item.offering_id,
                name=item.name,
                size_name=item.size.name,
                servings=item.size.servings,
                unit_price=item.size.price,
                quantity=item.quantity,
            )
            for item in accepted.items
        ]
        db.add(order)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if idempotency_key:
            existing = get_order_by_idempotency_key(db, idempotency_key)
            if existing is not None:
                return existing
        raise PersistenceFailure(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceFailure(str(exc)) from exc

    db.refresh(order)
    logger.info("Created order %s total=%s for %s", order.order_number, order.total_amount, order.delivery_date)
    return order


def list_orders(db: Session, status: str | None = None) -> list[Order]:
    """Return orders newest first, optionally filtered by status."""
    query = db.query(Order)
    if status is not None:
        query = query.filter(Order.status == ensure_status(status))
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def get_order(db: Session, order_id: int) -> Order:
    order: Order | None = db.get(Order, order_id)
    if order is None:
        raise OrderNotFoundError(f"Order {order_id} not found")
    return order


def update_order_status(
    db: Session,
    order: Order,
    new_status: str,
    *,
    strict: bool | None = None,
    now: datetime | None = None,
) -> Order:
    """Move an order to a new status and persist it."""
    set_status(
        order,
        new_status,
        now or utc_now(),
        strict=settings.strict_status_transitions if strict is None else strict,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def delete_order(db: Session, order: Order) -> None:
    logger.info("Deleting order %s in status %s", order.order_number, order.status)
    db.delete(order)
    db.commit()

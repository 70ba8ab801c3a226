"""Order status transition helpers."""

from __future__ import annotations

import logging
from datetime import datetime

from weekly_orders.models.order import Order

logger = logging.getLogger(__name__)

ORDER_STATUSES: list[str] = ["pending", "confirmed", "preparing", "delivering", "completed", "cancelled"]
INITIAL_STATUS: str = "pending"
TERMINAL_STATUSES: set[str] = {"completed", "cancelled"}

# Staff may move an order to any status at any time.
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    status: {target for target in ORDER_STATUSES if target != status} for status in ORDER_STATUSES
}

STRICT_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"preparing", "cancelled"},
    "preparing": {"delivering", "cancelled"},
    "delivering": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


class InvalidStatusError(ValueError):
    """Raised for a status outside ORDER_STATUSES."""


class StatusTransitionError(Exception):
    """Raised when strict transitions forbid moving between two statuses."""

    def __init__(self, current: str, new: str) -> None:
        self.current = current
        self.new = new
        super().__init__(f"Cannot change order status from {current} to {new}")


def ensure_status(value: str) -> str:
    if value not in ORDER_STATUSES:
        raise InvalidStatusError(f"Unknown order status: {value!r}")
    return value


def can_transition(current: str, new: str, strict: bool = False) -> bool:
    """Return whether order can move from current to new status."""
    if current == new:
        return not strict or current not in TERMINAL_STATUSES
    transitions: dict[str, set[str]] = STRICT_TRANSITIONS if strict else ALLOWED_TRANSITIONS
    return new in transitions.get(current, set())


def set_status(order: Order, new_status: str, now: datetime, strict: bool = False) -> None:
    """Set status and touch the update timestamp; no transition history is kept."""
    ensure_status(new_status)
    if not can_transition(order.status, new_status, strict=strict):
        raise StatusTransitionError(order.status, new_status)
    previous: str = order.status
    order.status = new_status
    order.updated_at = now
    logger.info("Order %s status %s -> %s", order.order_number, previous, new_status)

"""Submission-time order validation.

A draft is checked in three stages, stopping at the first failing one:
required fields, availability of every line on the resolved delivery day and
week, and the minimum lead time before the delivery window opens. The cart
does not re-check itself when the customer browses another week, so the
availability stage always runs against the live menu.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from weekly_orders.models.menu import MenuOffering
from weekly_orders.services.cart_service import CartLine
from weekly_orders.services.menu_service import SizeOption, available_offerings_for, find_size
from weekly_orders.utils.week import week_identifier, weekday_label

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME_HOURS: float = 2.0
REQUIRED_FIELDS: tuple[str, ...] = ("customer_name", "phone", "address", "delivery_date", "delivery_time")


class OrderValidationError(Exception):
    """Base class for recoverable order validation failures."""

    kind: str = "ValidationFailure"

    def to_detail(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class IncompleteFieldsError(OrderValidationError):
    """Raised when required order fields are blank or the cart is empty."""

    kind = "IncompleteFields"

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "missing_fields": self.missing_fields}


class UnavailableItemError(OrderValidationError):
    """Raised when cart lines are not on the menu of the delivery day and week."""

    kind = "UnavailableItem"

    def __init__(self, item_names: list[str], day_label: str, week_id: str) -> None:
        self.item_names = item_names
        self.day_label = day_label
        self.week_id = week_id
        super().__init__(f"Not on the {day_label} menu of week {week_id}: {', '.join(item_names)}")

    def to_detail(self) -> dict[str, Any]:
        return {
            **super().to_detail(),
            "item_names": self.item_names,
            "day": self.day_label,
            "week_id": self.week_id,
        }


class InsufficientLeadTimeError(OrderValidationError):
    """Raised when the delivery window opens too soon."""

    kind = "InsufficientLeadTime"

    def __init__(self, remaining_hours: float, required_hours: float) -> None:
        self.remaining_hours = remaining_hours
        self.required_hours = required_hours
        super().__init__(
            f"Delivery must be at least {required_hours:g} hours from now ({remaining_hours:.1f} hours left)"
        )

    def to_detail(self) -> dict[str, Any]:
        return {
            **super().to_detail(),
            "remaining_hours": round(self.remaining_hours, 2),
            "required_hours": self.required_hours,
        }


@dataclass
class OrderDraft:
    """Customer order as entered, before it is accepted."""

    customer_name: str = ""
    phone: str = ""
    address: str = ""
    delivery_date: date | None = None
    delivery_time: str = ""
    notes: str | None = None
    province: str | None = None
    district: str | None = None
    ward: str | None = None
    lines: list[CartLine] = field(default_factory=list)
    client_total: int | None = None


@dataclass(frozen=True)
class AcceptedItem:
    """Line repriced against the live offering."""

    offering_id: int
    name: str
    size: SizeOption
    quantity: int

    @property
    def line_total(self) -> int:
        return self.size.price * self.quantity


@dataclass
class AcceptedOrder:
    """Draft that passed validation, with the authoritative total."""

    draft: OrderDraft
    items: list[AcceptedItem]
    total_amount: int
    day_label: str
    week_id: str
    delivery_at: datetime


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _require_delivery_date(draft: OrderDraft) -> date:
    if draft.delivery_date is None:
        raise IncompleteFieldsError(["delivery_date"])
    return draft.delivery_date


def check_completeness(draft: OrderDraft) -> None:
    missing: list[str] = [name for name in REQUIRED_FIELDS if _is_blank(getattr(draft, name))]
    if not draft.lines:
        missing.append("items")
    if missing:
        raise IncompleteFieldsError(missing)


def parse_window_start(delivery_time: str) -> time:
    """Return the opening time of an ``H:MM - H:MM`` delivery window."""
    start_text: str = delivery_time.split("-", 1)[0].strip()
    hours_text, _, minutes_text = start_text.partition(":")
    try:
        return time(hour=int(hours_text), minute=int(minutes_text))
    except ValueError as exc:
        raise IncompleteFieldsError(["delivery_time"]) from exc


def check_availability(draft: OrderDraft, offerings: Iterable[MenuOffering]) -> list[AcceptedItem]:
    """Return the lines repriced from the delivery day's menu, or raise UnavailableItemError."""
    delivery_date: date = _require_delivery_date(draft)
    day_label: str = weekday_label(delivery_date)
    week_id: str = week_identifier(delivery_date)
    available: dict[int, MenuOffering] = {
        offering.id: offering for offering in available_offerings_for(offerings, day_label, week_id)
    }

    items: list[AcceptedItem] = []
    unavailable: list[str] = []
    for line in draft.lines:
        offering: MenuOffering | None = available.get(line.offering_id)
        size: SizeOption | None = find_size(offering, line.selected_size.name) if offering is not None else None
        if offering is None or size is None:
            if line.name not in unavailable:
                unavailable.append(line.name)
            continue
        items.append(AcceptedItem(offering_id=offering.id, name=offering.name, size=size, quantity=line.quantity))

    if unavailable:
        raise UnavailableItemError(unavailable, day_label, week_id)
    return items


def check_lead_time(draft: OrderDraft, now: datetime, lead_time_hours: float = DEFAULT_LEAD_TIME_HOURS) -> datetime:
    """Return the delivery instant, or raise when it is closer than the lead time."""
    delivery_date: date = _require_delivery_date(draft)
    delivery_at: datetime = datetime.combine(delivery_date, parse_window_start(draft.delivery_time))
    remaining: timedelta = delivery_at - now
    if remaining < timedelta(hours=lead_time_hours):
        raise InsufficientLeadTimeError(remaining.total_seconds() / 3600, lead_time_hours)
    return delivery_at


def validate_order(
    draft: OrderDraft,
    offerings: Iterable[MenuOffering],
    now: datetime,
    lead_time_hours: float = DEFAULT_LEAD_TIME_HOURS,
) -> AcceptedOrder:
    """Validate a draft against the live menu and lead-time policy."""
    try:
        check_completeness(draft)
        items: list[AcceptedItem] = check_availability(draft, offerings)
        delivery_at: datetime = check_lead_time(draft, now, lead_time_hours)
    except OrderValidationError as exc:
        logger.warning("Order draft rejected (%s): %s", exc.kind, exc)
        raise

    total_amount: int = sum(item.line_total for item in items)
    if draft.client_total is not None and draft.client_total != total_amount:
        logger.warning("Client total %s ignored; recomputed total is %s", draft.client_total, total_amount)

    return AcceptedOrder(
        draft=draft,
        items=items,
        total_amount=total_amount,
        day_label=weekday_label(delivery_at.date()),
        week_id=week_identifier(delivery_at.date()),
        delivery_at=delivery_at,
    )

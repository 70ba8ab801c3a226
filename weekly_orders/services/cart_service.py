"""Customer cart aggregation and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from weekly_orders.models.cart import CartRecord
from weekly_orders.models.menu import MenuOffering
from weekly_orders.services.menu_service import SizeOption

logger = logging.getLogger(__name__)


class WrongDayError(Exception):
    """Raised when adding an offering that belongs to a different day than the one being browsed."""

    kind: str = "WrongDay"

    def __init__(self, offering_name: str, offering_day: str, browsing_day: str) -> None:
        self.offering_name = offering_name
        self.offering_day = offering_day
        self.browsing_day = browsing_day
        super().__init__(f"{offering_name} belongs to {offering_day}, not {browsing_day}")

    def to_detail(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "message": str(self),
            "offering_day": self.offering_day,
            "browsing_day": self.browsing_day,
        }


def make_line_id(offering_id: int, size_name: str) -> str:
    """Return the cart identity of an (offering, size) pair."""
    return f"{offering_id}-{size_name}"


@dataclass
class CartLine:
    """One (offering, size) pairing with an aggregated quantity."""

    offering_id: int
    name: str
    quantity: int
    selected_size: SizeOption
    description: str | None = None
    category: str | None = None
    image_url: str = ""

    @property
    def line_id(self) -> str:
        return make_line_id(self.offering_id, self.selected_size.name)

    @property
    def line_total(self) -> int:
        return self.selected_size.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_id": self.line_id,
            "offering_id": self.offering_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "image_url": self.image_url,
            "quantity": self.quantity,
            "selected_size": self.selected_size.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> CartLine:
        return cls(
            offering_id=int(payload["offering_id"]),
            name=payload["name"],
            quantity=int(payload["quantity"]),
            selected_size=SizeOption.from_dict(payload["selected_size"]),
            description=payload.get("description"),
            category=payload.get("category"),
            image_url=payload.get("image_url") or "",
        )


@dataclass
class Cart:
    """In-progress selection of a single customer session."""

    lines: list[CartLine] = field(default_factory=list)

    def get_line(self, line_id: str) -> CartLine | None:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None

    def add_or_merge(
        self,
        offering: MenuOffering,
        size: SizeOption,
        quantity: int = 1,
        browsing_day: str | None = None,
    ) -> CartLine:
        """Add an offering/size pair, merging quantities into an existing line with the same identity."""
        if browsing_day is not None and offering.day != browsing_day:
            raise WrongDayError(offering.name, offering.day, browsing_day)
        if quantity < 1:
            raise ValueError("quantity must be >= 1")

        existing: CartLine | None = self.get_line(make_line_id(offering.id, size.name))
        if existing is not None:
            existing.quantity += quantity
            return existing

        line = CartLine(
            offering_id=offering.id,
            name=offering.name,
            quantity=quantity,
            selected_size=size,
            description=offering.description,
            category=offering.category,
            image_url=offering.image_url or "",
        )
        self.lines.append(line)
        return line

    def change_quantity(self, line_id: str, delta: int) -> CartLine | None:
        """Shift a line's quantity; a line reaching zero is removed and None is returned."""
        line: CartLine | None = self.get_line(line_id)
        if line is None:
            raise KeyError(line_id)
        line.quantity = max(0, line.quantity + delta)
        if line.quantity == 0:
            self.remove(line_id)
            return None
        return line

    def remove(self, line_id: str) -> None:
        self.lines = [line for line in self.lines if line.line_id != line_id]

    def clear(self) -> None:
        self.lines = []

    def total(self) -> int:
        return sum(line.line_total for line in self.lines)

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> dict[str, Any]:
        return {"lines": [line.to_dict() for line in self.lines]}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Cart:
        return cls(lines=[CartLine.from_dict(line) for line in payload.get("lines", [])])


def load_cart(db: Session, token: str) -> Cart:
    """Load a saved cart, returning an empty cart for unknown tokens."""
    record: CartRecord | None = db.get(CartRecord, token)
    if record is None:
        return Cart()
    return Cart.from_dict({"lines": record.lines})


def save_cart(db: Session, token: str, cart: Cart) -> None:
    """Persist the cart under its token."""
    serialized: list[dict[str, Any]] = cart.to_dict()["lines"]
    record: CartRecord | None = db.get(CartRecord, token)
    if record is None:
        record = CartRecord(token=token, lines=serialized)
    else:
        record.lines = serialized
    db.add(record)
    db.commit()


def delete_cart(db: Session, token: str) -> None:
    record: CartRecord | None = db.get(CartRecord, token)
    if record is not None:
        db.delete(record)
        db.commit()
        logger.info("Cleared cart %s", token)

"""Weekly menu services: size options, availability partition and offering CRUD."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from weekly_orders.models.catalog import Dish
from weekly_orders.models.menu import MenuOffering
from weekly_orders.utils.week import DAYS_OF_WEEK, ensure_day_label

logger = logging.getLogger(__name__)

DEFAULT_SIZE_NAME: str = "Phần tiêu chuẩn"
EDITABLE_OFFERING_FIELDS: set[str] = {
    "name",
    "description",
    "category",
    "image_url",
    "day",
    "week_id",
    "is_featured",
    "is_available",
    "base_price",
    "size_options",
}


@dataclass(frozen=True)
class SizeOption:
    """Purchasable serving configuration of a dish."""

    name: str
    servings: int
    price: int

    def __post_init__(self) -> None:
        if self.servings <= 0:
            raise ValueError("servings must be > 0")
        if self.price < 0:
            raise ValueError("price must be >= 0")

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SizeOption:
        return cls(name=str(payload["name"]), servings=int(payload["servings"]), price=int(payload["price"]))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "servings": self.servings, "price": self.price}


def size_options_for(offering: MenuOffering) -> list[SizeOption]:
    """Return purchasable sizes; offerings without sizes sell one standard portion at base price."""
    if offering.size_options:
        return [SizeOption.from_dict(option) for option in offering.size_options]
    return [SizeOption(name=DEFAULT_SIZE_NAME, servings=1, price=offering.base_price)]


def find_size(offering: MenuOffering, size_name: str) -> SizeOption | None:
    """Return the offering's size with the given name, if it still exists."""
    for option in size_options_for(offering):
        if option.name == size_name:
            return option
    return None


def is_available_for(offering: MenuOffering, day_label: str, week_id: str) -> bool:
    """Return whether offering can be delivered on the given day of the given week."""
    if not offering.is_available or offering.day != day_label:
        return False
    return offering.week_id is None or offering.week_id == week_id


def available_offerings_for(
    offerings: Iterable[MenuOffering],
    day_label: str,
    week_id: str,
) -> list[MenuOffering]:
    """Filter offerings down to those available for a delivery day and week."""
    return [offering for offering in offerings if is_available_for(offering, day_label, week_id)]


def list_offerings(db: Session, week_id: str | None = None, day: str | None = None) -> list[MenuOffering]:
    """Return menu offerings, optionally scoped to a week (legacy rows included) and a day."""
    query = db.query(MenuOffering)
    if week_id is not None:
        query = query.filter(or_(MenuOffering.week_id == week_id, MenuOffering.week_id.is_(None)))
    if day is not None:
        query = query.filter(MenuOffering.day == ensure_day_label(day))
    offerings: list[MenuOffering] = query.order_by(MenuOffering.id.asc()).all()
    day_order: dict[str, int] = {label: index for index, label in enumerate(DAYS_OF_WEEK)}
    return sorted(offerings, key=lambda offering: day_order.get(offering.day, len(DAYS_OF_WEEK)))


def get_offering(db: Session, offering_id: int) -> MenuOffering | None:
    return db.get(MenuOffering, offering_id)


def place_dish_on_menu(
    db: Session,
    *,
    dish: Dish,
    day: str,
    week_id: str,
    is_featured: bool = False,
) -> MenuOffering:
    """Snapshot a library dish onto one day of one week."""
    offering = MenuOffering(
        dish_id=dish.id,
        name=dish.name,
        description=dish.description,
        category=dish.category,
        image_url=dish.image_url or "",
        day=ensure_day_label(day),
        week_id=week_id,
        is_featured=is_featured,
        is_available=True,
        base_price=dish.base_price,
        size_options=list(dish.size_options or []),
    )
    db.add(offering)
    db.commit()
    db.refresh(offering)
    logger.info("Placed dish %s on %s of week %s as offering %s", dish.id, day, week_id, offering.id)
    return offering


def update_offering(db: Session, offering: MenuOffering, **changes: Any) -> MenuOffering:
    """Apply staff edits (availability, price, sizes, placement) to an offering."""
    unknown: set[str] = set(changes) - EDITABLE_OFFERING_FIELDS
    if unknown:
        raise ValueError(f"Unknown offering fields: {', '.join(sorted(unknown))}")
    if "day" in changes:
        ensure_day_label(changes["day"])
    if "size_options" in changes:
        changes["size_options"] = [SizeOption.from_dict(option).to_dict() for option in changes["size_options"]]

    for field, value in changes.items():
        setattr(offering, field, value)
    db.add(offering)
    db.commit()
    db.refresh(offering)
    return offering


def toggle_offering_available(db: Session, offering: MenuOffering) -> MenuOffering:
    """Toggle availability for an offering and persist the change."""
    offering.is_available = not offering.is_available
    db.add(offering)
    db.commit()
    db.refresh(offering)
    return offering


def delete_offering(db: Session, offering: MenuOffering) -> None:
    db.delete(offering)
    db.commit()


def copy_week_menu(db: Session, from_week_id: str, to_week_id: str) -> int:
    """Copy available offerings of one week into another, skipping placements already present."""
    if from_week_id == to_week_id:
        return 0

    source_rows: list[MenuOffering] = (
        db.query(MenuOffering)
        .filter(MenuOffering.week_id == from_week_id, MenuOffering.is_available.is_(True))
        .order_by(MenuOffering.id.asc())
        .all()
    )
    if not source_rows:
        return 0

    existing: set[tuple[str, int | None, str]] = {
        (row.day, row.dish_id, row.name)
        for row in db.query(MenuOffering).filter(MenuOffering.week_id == to_week_id).all()
    }

    created_count: int = 0
    for row in source_rows:
        if (row.day, row.dish_id, row.name) in existing:
            continue
        db.add(
            MenuOffering(
                dish_id=row.dish_id,
                name=row.name,
                description=row.description,
                category=row.category,
                image_url=row.image_url,
                day=row.day,
                week_id=to_week_id,
                is_featured=row.is_featured,
                is_available=True,
                base_price=row.base_price,
                size_options=list(row.size_options or []),
            )
        )
        existing.add((row.day, row.dish_id, row.name))
        created_count += 1

    if created_count > 0:
        db.commit()
        logger.info("Copied %s offerings from week %s to week %s", created_count, from_week_id, to_week_id)
    return created_count

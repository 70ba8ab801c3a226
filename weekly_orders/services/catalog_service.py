"""Dish library and category service helpers shared by API and staff board."""

from typing import Any

from sqlalchemy.orm import Session

from weekly_orders.models.catalog import Category, Dish
from weekly_orders.models.menu import MenuOffering
from weekly_orders.services.menu_service import SizeOption

DISH_FIELDS: set[str] = {"name", "description", "category", "base_price", "image_url", "size_options"}
CATEGORY_FIELDS: set[str] = {"name", "description", "display_order"}


def _normalize_sizes(size_options: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    return [SizeOption.from_dict(option).to_dict() for option in size_options or []]


def _apply_changes(instance: Any, changes: dict[str, Any], allowed: set[str]) -> None:
    unknown: set[str] = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
    for field, value in changes.items():
        setattr(instance, field, value)


def list_categories(db: Session) -> list[Category]:
    """Return categories in display order."""
    return db.query(Category).order_by(Category.display_order.asc(), Category.id.asc()).all()


def create_category(db: Session, name: str, description: str | None = None, display_order: int | None = None) -> Category:
    category = Category(name=name, description=description, display_order=display_order or 1)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category: Category, **changes: Any) -> Category:
    _apply_changes(category, changes, CATEGORY_FIELDS)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category: Category) -> None:
    db.delete(category)
    db.commit()


def list_dishes(db: Session, category: str | None = None) -> list[Dish]:
    """Return library dishes newest first, optionally for one category."""
    query = db.query(Dish)
    if category is not None:
        query = query.filter(Dish.category == category)
    return query.order_by(Dish.created_at.desc(), Dish.id.desc()).all()


def create_dish(
    db: Session,
    *,
    name: str,
    description: str | None = None,
    category: str | None = None,
    base_price: int = 0,
    image_url: str = "",
    size_options: list[dict[str, Any]] | None = None,
) -> Dish:
    """Create and persist a library dish."""
    dish = Dish(
        name=name,
        description=description,
        category=category,
        base_price=base_price,
        image_url=image_url or "",
        size_options=_normalize_sizes(size_options),
    )
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


def update_dish(db: Session, dish: Dish, **changes: Any) -> Dish:
    """Edit a library dish; offerings already placed on a menu keep their own snapshot."""
    if "size_options" in changes:
        changes["size_options"] = _normalize_sizes(changes["size_options"])
    _apply_changes(dish, changes, DISH_FIELDS)
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


def delete_dish(db: Session, dish: Dish) -> None:
    """Delete a library dish and detach offerings that were placed from it."""
    db.query(MenuOffering).filter(MenuOffering.dish_id == dish.id).update({MenuOffering.dish_id: None})
    db.delete(dish)
    db.commit()

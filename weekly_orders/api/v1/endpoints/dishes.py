"""Dish library endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from weekly_orders.db.session import get_db
from weekly_orders.models.catalog import Dish
from weekly_orders.schemas.menu import DishCreate, DishResponse, DishUpdate
from weekly_orders.services.catalog_service import create_dish, delete_dish, list_dishes, update_dish

router: APIRouter = APIRouter()


def _get_dish_or_404(db: Session, dish_id: int) -> Dish:
    dish: Dish | None = db.get(Dish, dish_id)
    if dish is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dish not found")
    return dish


@router.get("", response_model=list[DishResponse])
def get_dishes(category: str | None = Query(default=None), db: Session = Depends(get_db)) -> list[Dish]:
    """List library dishes, newest first."""
    return list_dishes(db=db, category=category)


@router.get("/{dish_id}", response_model=DishResponse)
def get_dish(dish_id: int, db: Session = Depends(get_db)) -> Dish:
    return _get_dish_or_404(db, dish_id)


@router.post("", response_model=DishResponse, status_code=status.HTTP_201_CREATED)
def create_library_dish(payload: DishCreate, db: Session = Depends(get_db)) -> Dish:
    """Create library dish."""
    return create_dish(db=db, **payload.model_dump())


@router.put("/{dish_id}", response_model=DishResponse)
def update_library_dish(dish_id: int, payload: DishUpdate, db: Session = Depends(get_db)) -> Dish:
    dish = _get_dish_or_404(db, dish_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in {"description", "category"}
    }
    return update_dish(db, dish, **changes)


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_library_dish(dish_id: int, db: Session = Depends(get_db)) -> None:
    delete_dish(db, _get_dish_or_404(db, dish_id))

"""Category endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from weekly_orders.db.session import get_db
from weekly_orders.models.catalog import Category
from weekly_orders.schemas.menu import CategoryCreate, CategoryResponse, CategoryUpdate
from weekly_orders.services.catalog_service import create_category, delete_category, list_categories, update_category

router: APIRouter = APIRouter()


def _get_category_or_404(db: Session, category_id: int) -> Category:
    category: Category | None = db.get(Category, category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("", response_model=list[CategoryResponse])
def get_categories(db: Session = Depends(get_db)) -> list[Category]:
    """List categories in display order."""
    return list_categories(db)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_menu_category(payload: CategoryCreate, db: Session = Depends(get_db)) -> Category:
    return create_category(db, name=payload.name, description=payload.description, display_order=payload.display_order)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_menu_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)) -> Category:
    category = _get_category_or_404(db, category_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    return update_category(db, category, **changes)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_category(category_id: int, db: Session = Depends(get_db)) -> None:
    delete_category(db, _get_category_or_404(db, category_id))

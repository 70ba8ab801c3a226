"""Weekly menu endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from weekly_orders.db.session import get_db
from weekly_orders.models.catalog import Dish
from weekly_orders.models.menu import MenuOffering
from weekly_orders.schemas.menu import (
    CopyWeekRequest,
    CopyWeekResponse,
    OfferingCreate,
    OfferingResponse,
    OfferingUpdate,
    WeekDay,
    WeekMenuResponse,
)
from weekly_orders.services.menu_service import (
    copy_week_menu,
    delete_offering,
    get_offering,
    list_offerings,
    place_dish_on_menu,
    toggle_offering_available,
    update_offering,
)
from weekly_orders.utils.week import DAYS_OF_WEEK, monday_of, week_dates, week_identifier

router: APIRouter = APIRouter()
NULLABLE_OFFERING_FIELDS: set[str] = {"description", "category", "week_id"}


def _get_offering_or_404(db: Session, offering_id: int) -> MenuOffering:
    offering: MenuOffering | None = get_offering(db, offering_id)
    if offering is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu offering not found")
    return offering


def _list_or_400(db: Session, week_id: str | None, day: str | None) -> list[MenuOffering]:
    try:
        return list_offerings(db=db, week_id=week_id, day=day)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[OfferingResponse])
def get_menu(
    week_id: str | None = Query(default=None),
    day: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[MenuOffering]:
    """Return menu offerings, optionally for one week and day."""
    return _list_or_400(db, week_id, day)


@router.get("/week", response_model=WeekMenuResponse)
def get_week_menu(
    on: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> WeekMenuResponse:
    """Return the Monday-first browsing week containing a date, with its offerings."""
    monday: date = monday_of(on or date.today())
    week_id: str = week_identifier(monday)
    offerings: list[MenuOffering] = list_offerings(db=db, week_id=week_id)
    return WeekMenuResponse(
        week_id=week_id,
        days=[WeekDay(day=label, date=value) for label, value in zip(DAYS_OF_WEEK, week_dates(monday))],
        offerings=[OfferingResponse.model_validate(offering) for offering in offerings],
    )


@router.get("/days/{day}", response_model=list[OfferingResponse])
def get_day_menu(
    day: str,
    week_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[MenuOffering]:
    """Return offerings of one day label."""
    return _list_or_400(db, week_id, day)


@router.post("", response_model=OfferingResponse, status_code=status.HTTP_201_CREATED)
def add_dish_to_menu(payload: OfferingCreate, db: Session = Depends(get_db)) -> MenuOffering:
    """Place a library dish on a day of a week."""
    dish: Dish | None = db.get(Dish, payload.dish_id)
    if dish is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dish not found")
    return place_dish_on_menu(
        db=db,
        dish=dish,
        day=payload.day,
        week_id=payload.week_id,
        is_featured=payload.is_featured,
    )


@router.put("/{offering_id}", response_model=OfferingResponse)
def edit_menu_offering(offering_id: int, payload: OfferingUpdate, db: Session = Depends(get_db)) -> MenuOffering:
    offering = _get_offering_or_404(db, offering_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_OFFERING_FIELDS
    }
    return update_offering(db, offering, **changes)


@router.post("/{offering_id}/toggle", response_model=OfferingResponse)
def toggle_menu_offering(offering_id: int, db: Session = Depends(get_db)) -> MenuOffering:
    """Flip availability of an offering."""
    return toggle_offering_available(db, _get_offering_or_404(db, offering_id))


@router.delete("/{offering_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_menu_offering(offering_id: int, db: Session = Depends(get_db)) -> None:
    delete_offering(db, _get_offering_or_404(db, offering_id))


@router.post("/copy-week", response_model=CopyWeekResponse)
def copy_week(payload: CopyWeekRequest, db: Session = Depends(get_db)) -> CopyWeekResponse:
    """Copy available offerings of one week into another."""
    created: int = copy_week_menu(db, from_week_id=payload.from_week_id, to_week_id=payload.to_week_id)
    return CopyWeekResponse(created=created)

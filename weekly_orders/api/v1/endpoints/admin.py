"""Staff settings endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from weekly_orders.db.session import get_db
from weekly_orders.schemas.settings import LeadTimeSetting
from weekly_orders.services.settings_service import get_lead_time_hours, save_lead_time_hours

router: APIRouter = APIRouter()


@router.get("/settings/lead-time", response_model=LeadTimeSetting)
def get_lead_time(db: Session = Depends(get_db)) -> LeadTimeSetting:
    return LeadTimeSetting(hours=get_lead_time_hours(db))


@router.put("/settings/lead-time", response_model=LeadTimeSetting)
def update_lead_time(payload: LeadTimeSetting, db: Session = Depends(get_db)) -> LeadTimeSetting:
    """Change the minimum hours between submission and the start of the delivery window."""
    save_lead_time_hours(db, hours=payload.hours)
    return LeadTimeSetting(hours=get_lead_time_hours(db))

"""Application settings helpers."""

from sqlalchemy.orm import Session

from weekly_orders.core.config import settings
from weekly_orders.models.app_setting import AppSetting

ORDER_LEAD_TIME_HOURS_KEY: str = "order_lead_time_hours"


def parse_lead_time_hours(value: str) -> float:
    """Parse a non-negative number of hours."""
    hours: float = float(value)
    if hours < 0:
        raise ValueError("Lead time must be >= 0 hours")
    return hours


def get_lead_time_hours(db: Session, *, default_hours: float | None = None) -> float:
    """Read the lead-time policy from the DB with fallback to configuration."""
    fallback: float = settings.order_lead_time_hours if default_hours is None else default_hours
    setting: AppSetting | None = db.get(AppSetting, ORDER_LEAD_TIME_HOURS_KEY)
    if setting is None:
        return fallback
    try:
        return parse_lead_time_hours(setting.value)
    except ValueError:
        return fallback


def save_lead_time_hours(db: Session, *, hours: float) -> None:
    """Persist the lead-time policy in app settings table."""
    value: str = f"{parse_lead_time_hours(str(hours)):g}"
    setting: AppSetting | None = db.get(AppSetting, ORDER_LEAD_TIME_HOURS_KEY)
    if setting is None:
        setting = AppSetting(key=ORDER_LEAD_TIME_HOURS_KEY, value=value)
        db.add(setting)
    else:
        setting.value = value
    db.commit()

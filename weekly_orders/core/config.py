"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "weekly_orders API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./weekly_orders.db")
    order_lead_time_hours: float = float(getenv("ORDER_LEAD_TIME_HOURS", "2"))
    strict_status_transitions: bool = getenv("STRICT_STATUS_TRANSITIONS", "0") == "1"
    seed_sample_data: bool = getenv("SEED_SAMPLE_DATA", "0") == "1"
    order_number_prefix: str = getenv("ORDER_NUMBER_PREFIX", "#")


settings: Settings = Settings()

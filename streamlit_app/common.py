"""Shared DB helpers for the Streamlit staff board."""

from datetime import datetime

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from weekly_orders.core.config import settings
from weekly_orders.db.base import Base
from weekly_orders.db.migrations import ensure_sqlite_schema

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base.metadata.create_all(bind=engine)
ensure_sqlite_schema(engine)


def get_session() -> Session:
    return SessionLocal()


def now_string() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M")


def format_vnd(amount: int) -> str:
    return f"{amount:,}".replace(",", ".") + " ₫"

"""FastAPI entrypoint for the weekly menu ordering service."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from weekly_orders.api.v1.api import api_router
from weekly_orders.core.config import settings
from weekly_orders.db import session as db_session
from weekly_orders.db.base import Base
from weekly_orders.db.migrations import ensure_sqlite_schema
from weekly_orders.db.seed import ensure_seed_data
from weekly_orders.utils.week import current_week_identifier

logger = logging.getLogger(__name__)

app = FastAPI(title="Weekly Menu Ordering", debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    ensure_sqlite_schema(db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            seeded = ensure_seed_data(session)
            logger.info("[BOOTSTRAP] sample data seeded: %s", "yes" if seeded else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Seeding failed; continuing startup.")
    logger.info(
        "Serving %s (%s) for week %s, lead time %sh",
        settings.app_name,
        settings.app_env,
        current_week_identifier(),
        settings.order_lead_time_hours,
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "week_id": current_week_identifier()}

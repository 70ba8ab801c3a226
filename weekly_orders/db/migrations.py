"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _sqlite_index_names(connection: Connection, table_name: str) -> set[str]:
    """Return index names for a SQLite table using PRAGMA index_list."""
    rows = connection.execute(text(f"PRAGMA index_list({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight schema updates for legacy SQLite databases.

    Menus created before week scoping have no ``week_id`` column; the column is
    added as nullable so those rows stay visible in every week.
    """
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}

        if "menu_offerings" in table_names:
            offering_columns: set[str] = _sqlite_column_names(connection, "menu_offerings")
            if "week_id" not in offering_columns:
                connection.execute(text("ALTER TABLE menu_offerings ADD COLUMN week_id VARCHAR(16)"))
            if "is_featured" not in offering_columns:
                connection.execute(
                    text("ALTER TABLE menu_offerings ADD COLUMN is_featured BOOLEAN NOT NULL DEFAULT 0")
                )
            if "size_options" not in offering_columns:
                connection.execute(text("ALTER TABLE menu_offerings ADD COLUMN size_options JSON NOT NULL DEFAULT '[]'"))

        if "orders" in table_names:
            order_columns: set[str] = _sqlite_column_names(connection, "orders")
            if "idempotency_key" not in order_columns:
                connection.execute(text("ALTER TABLE orders ADD COLUMN idempotency_key VARCHAR(64)"))
            if "updated_at" not in order_columns:
                now_iso: str = datetime.now(timezone.utc).replace(tzinfo=None).isoformat(sep=" ", timespec="seconds")
                connection.execute(
                    text(f"ALTER TABLE orders ADD COLUMN updated_at DATETIME NOT NULL DEFAULT '{now_iso}'")
                )
            if "client_total_amount" not in order_columns:
                connection.execute(text("ALTER TABLE orders ADD COLUMN client_total_amount INTEGER"))

            order_indexes: set[str] = _sqlite_index_names(connection, "orders")
            if "uq_orders_idempotency_key" not in order_indexes:
                connection.execute(
                    text("CREATE UNIQUE INDEX uq_orders_idempotency_key ON orders (idempotency_key)")
                )

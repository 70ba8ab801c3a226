"""Tests for lightweight SQLite schema migrations."""

from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from weekly_orders.db.base import Base
from weekly_orders.db.migrations import ensure_sqlite_schema


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _create_legacy_menu_table(engine: Engine) -> None:
    with engine.begin() as connection:
        connection.execute(
            text(
                """
                CREATE TABLE menu_offerings (
                    id INTEGER NOT NULL,
                    name VARCHAR(255) NOT NULL,
                    description TEXT,
                    category VARCHAR(255),
                    image_url VARCHAR(1024) NOT NULL DEFAULT '',
                    day VARCHAR(32) NOT NULL,
                    is_available BOOLEAN NOT NULL DEFAULT 1,
                    base_price INTEGER NOT NULL DEFAULT 0,
                    created_at DATETIME,
                    updated_at DATETIME,
                    PRIMARY KEY (id)
                )
                """
            )
        )
        connection.execute(text("INSERT INTO menu_offerings (id, name, day) VALUES (1, 'Bánh mì', 'Thứ Hai')"))


def test_ensure_sqlite_schema_adds_week_columns_to_legacy_menu(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "legacy_menu.db")
    _create_legacy_menu_table(engine)

    ensure_sqlite_schema(engine)

    with engine.begin() as connection:
        columns = {row["name"] for row in connection.execute(text("PRAGMA table_info(menu_offerings);")).mappings()}
        legacy_row = connection.execute(text("SELECT week_id, is_featured FROM menu_offerings WHERE id = 1")).one()

    assert {"week_id", "is_featured", "size_options"} <= columns
    assert legacy_row.week_id is None
    assert legacy_row.is_featured == 0


def test_ensure_sqlite_schema_is_idempotent_on_current_schema(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "current_schema.db")
    Base.metadata.create_all(bind=engine)

    ensure_sqlite_schema(engine)
    ensure_sqlite_schema(engine)

    with engine.begin() as connection:
        indexes = {row["name"] for row in connection.execute(text("PRAGMA index_list(orders);")).mappings()}

    assert "uq_orders_idempotency_key" in indexes

"""Database seed behavior tests."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from weekly_orders.core.config import settings
from weekly_orders.db.base import Base
from weekly_orders.db.seed import SAMPLE_DISHES, ensure_seed_data
from weekly_orders.models.catalog import Category, Dish


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def test_ensure_seed_data_fills_empty_store(tmp_path: Path, monkeypatch) -> None:
    """Sample dishes are created once when seeding is enabled."""
    engine = _build_test_engine(tmp_path / "seed_enabled.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(settings, "seed_sample_data", True)

    with testing_session_local() as session:
        assert ensure_seed_data(session) is True
        assert ensure_seed_data(session) is False

    with testing_session_local() as session:
        assert session.query(Dish).count() == len(SAMPLE_DISHES)
        pho: Dish = session.query(Dish).filter(Dish.name == "Phở chay").one()
        assert [option["name"] for option in pho.size_options] == ["Phần 1 người", "Phần 2 người"]
        assert session.query(Category).order_by(Category.display_order).first().name == "Món Cuốn"


def test_ensure_seed_data_skips_when_disabled(tmp_path: Path, monkeypatch) -> None:
    """Nothing is written unless seeding is switched on."""
    engine = _build_test_engine(tmp_path / "seed_disabled.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(settings, "seed_sample_data", False)

    with testing_session_local() as session:
        assert ensure_seed_data(session) is False
        assert session.query(Dish).count() == 0

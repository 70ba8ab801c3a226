"""Staff order management flow tests."""

from datetime import date, datetime, timezone
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from weekly_orders.core.config import settings
from weekly_orders.db import session as db_session
from weekly_orders.db.base import Base
from weekly_orders.main import app
from weekly_orders.models.menu import MenuOffering
from weekly_orders.services.cart_service import CartLine
from weekly_orders.services.menu_service import SizeOption
from weekly_orders.services.order_service import create_order, list_orders
from weekly_orders.services.order_validation import OrderDraft, validate_order


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _seed_monday_offering(session: Session) -> MenuOffering:
    offering = MenuOffering(
        name="Gỏi cuốn chay",
        day="Thứ Hai",
        week_id="2025-46",
        is_available=True,
        base_price=35000,
        size_options=[],
    )
    session.add(offering)
    session.commit()
    session.refresh(offering)
    return offering


def _order_payload(offering_id: int, customer_name: str = "Lan") -> dict:
    return {
        "customer_name": customer_name,
        "phone": "0901234567",
        "address": "12 Nguyễn Trãi",
        "delivery_date": "2025-11-10",
        "delivery_time": "11:00 - 12:00",
        "lines": [
            {
                "offering_id": offering_id,
                "name": "Gỏi cuốn chay",
                "quantity": 3,
                "selected_size": {"name": "Phần tiêu chuẩn", "servings": 1, "price": 35000},
            }
        ],
    }


def test_staff_can_move_order_to_any_status(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "test_status_any.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(
        "weekly_orders.api.v1.endpoints.orders.current_local_datetime",
        lambda: datetime(2025, 11, 10, 8, 0),
    )

    with TestClient(app) as client:
        with testing_session_local() as setup_session:
            offering_id = _seed_monday_offering(setup_session).id

        created = client.post("/api/v1/orders", json=_order_payload(offering_id))
        assert created.status_code == 201
        order_id = created.json()["id"]
        assert created.json()["total_amount"] == 105000

        completed = client.patch(f"/api/v1/orders/{order_id}", json={"status": "completed"})
        assert completed.status_code == 200
        assert completed.json()["status"] == "completed"

        reopened = client.patch(f"/api/v1/orders/{order_id}", json={"status": "pending"})
        assert reopened.status_code == 200
        assert reopened.json()["status"] == "pending"

        unknown = client.patch(f"/api/v1/orders/{order_id}", json={"status": "shipped"})
        assert unknown.status_code == 400

        assert client.get("/api/v1/orders", params={"status": "pending"}).json()[0]["id"] == order_id
        assert client.get("/api/v1/orders", params={"status": "cancelled"}).json() == []

        assert client.delete(f"/api/v1/orders/{order_id}").status_code == 204
        assert client.get(f"/api/v1/orders/{order_id}").status_code == 404


def test_strict_transitions_reject_skipped_steps(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "test_status_strict.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "strict_status_transitions", True)
    monkeypatch.setattr(
        "weekly_orders.api.v1.endpoints.orders.current_local_datetime",
        lambda: datetime(2025, 11, 10, 8, 0),
    )

    with TestClient(app) as client:
        with testing_session_local() as setup_session:
            offering_id = _seed_monday_offering(setup_session).id

        order_id = client.post("/api/v1/orders", json=_order_payload(offering_id)).json()["id"]

        skipped = client.patch(f"/api/v1/orders/{order_id}", json={"status": "completed"})
        assert skipped.status_code == 409

        confirmed = client.patch(f"/api/v1/orders/{order_id}", json={"status": "confirmed"})
        assert confirmed.status_code == 200


def test_orders_are_listed_newest_first_with_unique_numbers(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "test_order_listing.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    with testing_session_local() as session:
        offering = _seed_monday_offering(session)
        draft = OrderDraft(
            customer_name="Minh",
            phone="0907654321",
            address="5 Lê Lợi",
            delivery_date=date(2025, 11, 10),
            delivery_time="11:00 - 12:00",
            lines=[
                CartLine(
                    offering_id=offering.id,
                    name=offering.name,
                    quantity=1,
                    selected_size=SizeOption(name="Phần tiêu chuẩn", servings=1, price=35000),
                )
            ],
        )
        accepted = validate_order(draft, [offering], now=datetime(2025, 11, 10, 8, 0))
        created_at = datetime(2025, 11, 10, 1, 0, 0, 123000, tzinfo=timezone.utc)

        first = create_order(session, accepted, now=created_at)
        second = create_order(session, accepted, now=created_at)
        third = create_order(session, accepted, now=datetime(2025, 11, 10, 2, 0, tzinfo=timezone.utc))

        assert second.order_number == f"{first.order_number}-2"
        assert [order.id for order in list_orders(session)] == [third.id, second.id, first.id]
        assert first.status == "pending"
        assert first.items[0].line_total == 35000

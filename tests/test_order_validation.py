"""Submission-time validation tests: completeness, availability and lead time."""

from datetime import date, datetime

import pytest

from weekly_orders.models.menu import MenuOffering
from weekly_orders.services.cart_service import CartLine
from weekly_orders.services.menu_service import SizeOption
from weekly_orders.services.order_validation import (
    IncompleteFieldsError,
    InsufficientLeadTimeError,
    OrderDraft,
    UnavailableItemError,
    validate_order,
)

MONDAY = date(2025, 11, 10)
NEXT_MONDAY = date(2025, 11, 17)
SINGLE = SizeOption(name="Phần 1 người", servings=1, price=45000)
DOUBLE = SizeOption(name="Phần 2 người", servings=2, price=85000)


def _offering(
    offering_id: int,
    name: str,
    day: str = "Thứ Hai",
    week_id: str | None = "2025-46",
    is_available: bool = True,
) -> MenuOffering:
    return MenuOffering(
        id=offering_id,
        name=name,
        description=None,
        category=None,
        image_url="",
        day=day,
        week_id=week_id,
        is_featured=False,
        is_available=is_available,
        base_price=45000,
        size_options=[SINGLE.to_dict(), DOUBLE.to_dict()],
    )


def _line(offering_id: int, name: str, quantity: int = 1, size: SizeOption = SINGLE) -> CartLine:
    return CartLine(offering_id=offering_id, name=name, quantity=quantity, selected_size=size)


def _draft(lines: list[CartLine], delivery_date: date = MONDAY, delivery_time: str = "11:00 - 12:00") -> OrderDraft:
    return OrderDraft(
        customer_name="Lan",
        phone="0901234567",
        address="12 Nguyễn Trãi",
        delivery_date=delivery_date,
        delivery_time=delivery_time,
        lines=lines,
    )


def test_order_for_scheduled_week_is_accepted() -> None:
    pho = _offering(1, "Phở chay")
    draft = _draft([_line(1, "Phở chay", quantity=2)], delivery_time="7:00 - 8:00")

    accepted = validate_order(draft, [pho], now=datetime(2025, 11, 10, 5, 0))

    assert accepted.week_id == "2025-46"
    assert accepted.day_label == "Thứ Hai"
    assert accepted.total_amount == 90000


def test_same_weekday_of_next_week_is_unavailable() -> None:
    pho = _offering(1, "Phở chay")
    draft = _draft([_line(1, "Phở chay")], delivery_date=NEXT_MONDAY)

    with pytest.raises(UnavailableItemError) as exc_info:
        validate_order(draft, [pho], now=datetime(2025, 11, 10, 5, 0))

    assert exc_info.value.item_names == ["Phở chay"]
    assert exc_info.value.week_id == "2025-47"
    assert exc_info.value.to_detail()["day"] == "Thứ Hai"


def test_window_opening_within_lead_time_is_rejected() -> None:
    pho = _offering(1, "Phở chay")
    draft = _draft([_line(1, "Phở chay")], delivery_time="7:00 - 8:00")

    with pytest.raises(InsufficientLeadTimeError) as exc_info:
        validate_order(draft, [pho], now=datetime(2025, 11, 10, 6, 0))

    assert exc_info.value.remaining_hours == pytest.approx(1.0)
    assert exc_info.value.to_detail()["remaining_hours"] == 1.0


def test_lead_time_boundary_is_inclusive() -> None:
    pho = _offering(1, "Phở chay")
    draft = _draft([_line(1, "Phở chay")], delivery_time="7:00 - 8:00")

    validate_order(draft, [pho], now=datetime(2025, 11, 10, 5, 0, 0))
    with pytest.raises(InsufficientLeadTimeError):
        validate_order(draft, [pho], now=datetime(2025, 11, 10, 5, 0, 1))


def test_lead_time_follows_configured_hours() -> None:
    pho = _offering(1, "Phở chay")
    draft = _draft([_line(1, "Phở chay")], delivery_time="7:00 - 8:00")

    with pytest.raises(InsufficientLeadTimeError):
        validate_order(draft, [pho], now=datetime(2025, 11, 10, 3, 0), lead_time_hours=5)
    validate_order(draft, [pho], now=datetime(2025, 11, 10, 6, 30), lead_time_hours=0)


def test_missing_fields_are_reported_before_other_checks() -> None:
    draft = OrderDraft(customer_name="  ", phone="0901234567", delivery_time="", lines=[])

    with pytest.raises(IncompleteFieldsError) as exc_info:
        validate_order(draft, [], now=datetime(2025, 11, 10, 5, 0))

    assert exc_info.value.missing_fields == ["customer_name", "address", "delivery_date", "delivery_time", "items"]
    assert exc_info.value.to_detail()["kind"] == "IncompleteFields"


def test_malformed_delivery_window_counts_as_missing() -> None:
    draft = _draft([_line(1, "Phở chay")], delivery_time="buổi sáng")

    with pytest.raises(IncompleteFieldsError) as exc_info:
        validate_order(draft, [_offering(1, "Phở chay")], now=datetime(2025, 11, 10, 5, 0))

    assert exc_info.value.missing_fields == ["delivery_time"]


def test_unavailable_lists_exactly_mismatched_items() -> None:
    offerings = [
        _offering(1, "Phở chay"),
        _offering(2, "Gỏi cuốn chay", day="Thứ Ba"),
        _offering(3, "Đậu hũ sốt cà chua", is_available=False),
        _offering(4, "Bún xào"),
    ]
    draft = _draft(
        [
            _line(1, "Phở chay"),
            _line(2, "Gỏi cuốn chay"),
            _line(3, "Đậu hũ sốt cà chua"),
            _line(4, "Bún xào"),
            _line(9, "Bánh mì"),
        ]
    )

    with pytest.raises(UnavailableItemError) as exc_info:
        validate_order(draft, offerings, now=datetime(2025, 11, 9, 8, 0))

    assert exc_info.value.item_names == ["Gỏi cuốn chay", "Đậu hũ sốt cà chua", "Bánh mì"]


def test_legacy_offering_without_week_is_available_every_week() -> None:
    legacy = _offering(1, "Phở chay", week_id=None)
    draft = _draft([_line(1, "Phở chay")], delivery_date=NEXT_MONDAY)

    accepted = validate_order(draft, [legacy], now=datetime(2025, 11, 10, 5, 0))

    assert accepted.week_id == "2025-47"


def test_removed_size_makes_line_unavailable() -> None:
    offering = _offering(1, "Phở chay")
    offering.size_options = [SINGLE.to_dict()]
    draft = _draft([_line(1, "Phở chay", size=DOUBLE)])

    with pytest.raises(UnavailableItemError):
        validate_order(draft, [offering], now=datetime(2025, 11, 10, 5, 0))


def test_lines_are_repriced_and_client_total_ignored() -> None:
    offering = _offering(1, "Phở chay")
    stale_size = SizeOption(name="Phần 2 người", servings=2, price=70000)
    draft = _draft([_line(1, "Phở chay", quantity=2, size=stale_size)])
    draft.client_total = 1

    accepted = validate_order(draft, [offering], now=datetime(2025, 11, 10, 5, 0))

    assert accepted.items[0].size.price == 85000
    assert accepted.total_amount == 170000

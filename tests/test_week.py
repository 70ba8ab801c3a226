"""Week identifier and weekday label tests."""

from datetime import date, timedelta

import pytest

from weekly_orders.utils.week import (
    DAYS_OF_WEEK,
    date_for_day,
    monday_of,
    week_dates,
    week_identifier,
    weekday_label,
)


def test_week_identifier_matches_stored_menu_tokens() -> None:
    assert week_identifier(date(2025, 11, 10)) == "2025-46"
    assert week_identifier(date(2025, 11, 17)) == "2025-47"


def test_week_identifier_pads_single_digit_weeks() -> None:
    assert week_identifier(date(2025, 1, 1)) == "2025-01"


def test_weeks_are_anchored_to_jan_first_and_start_on_sunday() -> None:
    # 2025-01-01 is a Wednesday: the first computed week ends on Saturday the 4th.
    assert week_identifier(date(2025, 1, 4)) == "2025-01"
    assert week_identifier(date(2025, 1, 5)) == "2025-02"
    # ISO would place 2024-12-30 in 2025-W01; the Jan-1 anchored count keeps it in 2024.
    assert week_identifier(date(2024, 12, 30)) == "2024-53"
    assert week_identifier(date(2024, 12, 31)) == "2024-53"


def test_dates_within_one_computed_week_share_identifier() -> None:
    sunday = date(2025, 11, 9)
    identifiers = {week_identifier(sunday + timedelta(days=offset)) for offset in range(7)}

    assert identifiers == {"2025-46"}


def test_adjacent_computed_weeks_differ() -> None:
    saturday = date(2025, 11, 15)

    assert week_identifier(saturday) != week_identifier(saturday + timedelta(days=1))
    assert week_identifier(saturday - timedelta(days=7)) != week_identifier(saturday)


def test_year_starting_on_sunday_keeps_full_first_week() -> None:
    assert week_identifier(date(2023, 1, 1)) == "2023-01"
    assert week_identifier(date(2023, 1, 7)) == "2023-01"
    assert week_identifier(date(2023, 1, 8)) == "2023-02"


def test_weekday_label_is_monday_first() -> None:
    assert weekday_label(date(2025, 11, 10)) == "Thứ Hai"
    assert weekday_label(date(2025, 11, 15)) == "Thứ Bảy"
    assert weekday_label(date(2025, 11, 16)) == "Chủ Nhật"
    assert DAYS_OF_WEEK[6] == "Chủ Nhật"


def test_browsing_week_helpers() -> None:
    wednesday = date(2025, 11, 12)

    assert monday_of(wednesday) == date(2025, 11, 10)
    assert monday_of(date(2025, 11, 16)) == date(2025, 11, 10)
    assert week_dates(date(2025, 11, 10))[-1] == date(2025, 11, 16)
    assert date_for_day("Thứ Hai", today=wednesday) == date(2025, 11, 10)
    assert date_for_day("Chủ Nhật", today=wednesday) == date(2025, 11, 16)
    assert date_for_day("Thứ Hai", week_offset=1, today=wednesday) == date(2025, 11, 17)


def test_unknown_day_label_is_rejected() -> None:
    with pytest.raises(ValueError):
        date_for_day("Monday")

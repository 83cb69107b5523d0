import pytest

from caravan.models import Calendar
from caravan.models import CalendarDay
from caravan.models import Week


def test_short_first_week_is_placed_by_weekday() -> None:
    # 2024-01-10 is a Wednesday.
    week = Week.from_raw(
        [
            {"date": "2024-01-10", "contributionCount": 1},
            {"date": "2024-01-11", "contributionCount": 2},
            {"date": "2024-01-12", "contributionCount": 0},
            {"date": "2024-01-13", "contributionCount": 4},
        ]
    )

    assert week.days[:3] == (None, None, None)
    assert [day.contribution_count for day in week.present_days()] == [1, 2, 0, 4]
    assert week.days[3] == CalendarDay(date="2024-01-10", contribution_count=1)


def test_malformed_days_become_empty_slots() -> None:
    week = Week.from_raw(
        [
            {"date": "2024-01-07"},
            "not-a-day",
            {"date": "2024-01-09", "contributionCount": -1},
            {"date": "2024-01-10", "contributionCount": True},
            {"date": "2024-01-11", "contributionCount": 3},
            None,
        ]
    )

    assert len(week.days) == 7
    assert week.present_days() == [
        CalendarDay(date="2024-01-11", contribution_count=3)
    ]


def test_unparsable_date_keeps_list_position() -> None:
    week = Week.from_raw(
        [
            {"date": "2024-01-07", "contributionCount": 1},
            {"date": "someday", "contributionCount": 5},
        ]
    )

    assert week.days[1] == CalendarDay(date="someday", contribution_count=5)


def test_calendar_from_raw_tolerates_broken_weeks() -> None:
    calendar = Calendar.from_raw(
        [
            {"contributionDays": [{"date": "2024-01-07", "contributionCount": 2}]},
            {"contributionDays": None},
            "garbage",
        ]
    )

    assert len(calendar.weeks) == 3
    assert calendar.weeks[1].present_days() == []
    assert calendar.weeks[2].days == (None,) * 7
    assert calendar.counts() == [2]
    assert calendar.total() == 2


def test_calendar_fixture_builds_consecutive_weeks(make_calendar) -> None:
    calendar = make_calendar([[0, 1, 2, 3, 4, 5, 6], [7]])

    assert calendar.weeks[0].days[0].date == "2024-01-07"
    assert calendar.weeks[1].days[0].date == "2024-01-14"
    assert calendar.weeks[1].days[1] is None
    assert calendar.total() == 28


def test_calendar_fixture_rejects_overlong_weeks(make_calendar) -> None:
    with pytest.raises(ValueError, match="week 1 has 8 days"):
        make_calendar([[1] * 7, [1] * 8])

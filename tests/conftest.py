from collections.abc import Callable
from collections.abc import Sequence
from datetime import date
from datetime import timedelta

import pytest

from caravan.models import Calendar
from caravan.models import Week

FIRST_SUNDAY = date(2024, 1, 7)


def build_calendar(
    columns: Sequence[Sequence[int]], start: date = FIRST_SUNDAY
) -> Calendar:
    """Lay out per-week counts as consecutive days starting on a Sunday."""

    weeks: list[Week] = []
    for index, counts in enumerate(columns):
        if len(counts) > 7:
            raise ValueError(f"week {index} has {len(counts)} days")
        week_start = start + timedelta(weeks=index)
        items = [
            {
                "date": (week_start + timedelta(days=offset)).isoformat(),
                "contributionCount": count,
            }
            for offset, count in enumerate(counts)
        ]
        weeks.append(Week.from_raw(items))
    return Calendar(weeks=tuple(weeks))


@pytest.fixture
def make_calendar() -> Callable[..., Calendar]:
    return build_calendar

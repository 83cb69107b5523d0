from collections.abc import Mapping
from collections.abc import Sequence
from datetime import date
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DAYS_PER_WEEK = 7


class CalendarDay(BaseModel):
    """Single day of the contribution calendar as returned by GitHub."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    contribution_count: int = Field(alias="contributionCount", ge=0)

    @classmethod
    def from_raw(cls, item: object) -> "CalendarDay | None":
        """Build a day from a raw GraphQL item, or None when it is incomplete."""

        if not isinstance(item, Mapping):
            return None
        raw_date = item.get("date")
        raw_count = item.get("contributionCount")
        if not isinstance(raw_date, str) or not raw_date:
            return None
        if isinstance(raw_count, bool) or not isinstance(raw_count, int):
            return None
        if raw_count < 0:
            return None
        return cls(date=raw_date, contribution_count=raw_count)

    def weekday(self) -> int | None:
        """Return the Sunday-based weekday index (0..6), None if the date is unparsable."""

        try:
            parsed_day = date.fromisoformat(self.date)
        except ValueError:
            return None
        return (parsed_day.weekday() + 1) % 7


class Week(BaseModel):
    """Seven weekday slots; an absent day is an explicit None."""

    model_config = ConfigDict(frozen=True)

    days: tuple[CalendarDay | None, ...] = (None,) * DAYS_PER_WEEK

    @classmethod
    def from_raw(cls, items: Sequence[object]) -> "Week":
        """Place raw GraphQL day items into their weekday slots.

        GitHub returns short first and last weeks, so a day is placed by the
        weekday of its date. Items whose date cannot be parsed keep their list
        position. Incomplete items leave their slot empty.
        """

        slots: list[CalendarDay | None] = [None] * DAYS_PER_WEEK
        for position, item in enumerate(items):
            day = CalendarDay.from_raw(item)
            if day is None:
                continue
            slot = day.weekday()
            if slot is None:
                slot = position
            if slot >= DAYS_PER_WEEK or slots[slot] is not None:
                continue
            slots[slot] = day
        return cls(days=tuple(slots))

    def present_days(self) -> list[CalendarDay]:
        return [day for day in self.days if day is not None]


class Calendar(BaseModel):
    """Chronologically ordered contribution weeks."""

    model_config = ConfigDict(frozen=True)

    weeks: tuple[Week, ...] = ()

    @classmethod
    def from_raw(cls, weeks: Sequence[object]) -> "Calendar":
        parsed: list[Week] = []
        for week in weeks:
            contribution_days = (
                week.get("contributionDays") if isinstance(week, Mapping) else None
            )
            if not isinstance(contribution_days, list):
                parsed.append(Week())
                continue
            parsed.append(Week.from_raw(contribution_days))
        return cls(weeks=tuple(parsed))

    def counts(self) -> list[int]:
        return [
            day.contribution_count for week in self.weeks for day in week.present_days()
        ]

    def total(self) -> int:
        return sum(self.counts())


class GridCell(BaseModel):
    """Calendar day projected onto the grid with its intensity level."""

    model_config = ConfigDict(frozen=True)

    column: int
    row: int
    x: float
    y: float
    day: CalendarDay | None = None
    level: int = Field(default=0, ge=0, le=4)


class TrailPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Trail(BaseModel):
    """Ordered trail points; closed trails loop back to their first point."""

    model_config = ConfigDict(frozen=True)

    points: tuple[TrailPoint, ...]
    closed: bool = False


class Marker(BaseModel):
    """Decoration spot; column and row are None off the grid."""

    model_config = ConfigDict(frozen=True)

    column: int | None = None
    row: int | None = None
    x: float
    y: float
    kind: Literal["campfire", "tent"]

from pydantic import BaseModel

from caravan.services.trail import TrailMode


class MarkerSpot(BaseModel):
    """Grid position of a decoration."""

    kind: str
    column: int | None
    row: int | None


class CaravanSummary(BaseModel):
    """Computed layout of the authenticated user's caravan."""

    username: str
    total: int
    weeks: int
    thresholds: tuple[int, int, int, int]
    trail_mode: TrailMode
    trail_points: int
    duration_seconds: float
    markers: list[MarkerSpot]

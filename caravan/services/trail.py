from collections.abc import Sequence
from enum import Enum

from caravan.models import DAYS_PER_WEEK
from caravan.models import GridCell
from caravan.models import Trail
from caravan.models import TrailPoint
from caravan.services.grid import GridGeometry

DEFAULT_MAX_POINTS = 90
MIN_DURATION_SECONDS = 14
MAX_DURATION_SECONDS = 26


def fallback_loop(geometry: GridGeometry) -> Trail:
    """Closed rectangle around the first two cells of the first column."""

    left, top = geometry.cell_origin(0, 0)
    right = left + geometry.cell
    bottom = top + geometry.step + geometry.cell
    return Trail(
        points=(
            TrailPoint(x=left, y=top),
            TrailPoint(x=right, y=top),
            TrailPoint(x=right, y=bottom),
            TrailPoint(x=left, y=bottom),
        ),
        closed=True,
    )


class TrailMode(str, Enum):
    """How the animated trail walks the grid."""

    SNAKE = "snake"
    HIGHLIGHTS = "highlights"


def _or_fallback(points: list[TrailPoint], geometry: GridGeometry) -> Trail:
    if len(points) < 2:
        return fallback_loop(geometry)
    return Trail(points=tuple(points))


def snake_trail(columns: int, geometry: GridGeometry) -> Trail:
    """Visit every slot: even columns downwards, odd columns upwards."""

    points: list[TrailPoint] = []
    for column in range(columns):
        if column % 2 == 0:
            rows = range(DAYS_PER_WEEK)
        else:
            rows = range(DAYS_PER_WEEK - 1, -1, -1)
        for row in rows:
            points.append(geometry.cell_center(column, row))
    return _or_fallback(points, geometry)


def highlight_trail(
    cells: Sequence[GridCell],
    geometry: GridGeometry,
    max_points: int = DEFAULT_MAX_POINTS,
) -> Trail:
    """Follow only active days, keeping the most recent `max_points`."""

    active = sorted(
        (cell for cell in cells if cell.day and cell.day.contribution_count > 0),
        key=lambda cell: (cell.column, cell.row),
    )
    if max_points > 0:
        active = active[-max_points:]
    else:
        active = []
    return _or_fallback(
        [geometry.cell_center(cell.column, cell.row) for cell in active], geometry
    )


def build_trail(
    mode: TrailMode,
    cells: Sequence[GridCell],
    columns: int,
    geometry: GridGeometry,
    max_points: int = DEFAULT_MAX_POINTS,
) -> Trail:
    if mode is TrailMode.HIGHLIGHTS:
        return highlight_trail(cells, geometry, max_points=max_points)
    return snake_trail(columns, geometry)


def path_data(trail: Trail) -> str:
    """Return SVG path data for the trail."""

    d = "M " + " L ".join(f"{point.x:.2f} {point.y:.2f}" for point in trail.points)
    if trail.closed:
        d += " Z"
    return d


def animation_duration(point_count: int) -> int:
    """Scale loop duration with trail length, clamped to a pleasant range."""

    seconds = (point_count + 10) // 20
    return min(MAX_DURATION_SECONDS, max(MIN_DURATION_SECONDS, seconds))

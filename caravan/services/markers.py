from collections.abc import Sequence

from caravan.models import GridCell
from caravan.models import Marker
from caravan.models import Trail
from caravan.services.grid import GridGeometry

DEFAULT_MAX_MARKERS = 4
MARKER_TIERS = (4, 3)


def terminal_marker(trail: Trail) -> Marker:
    """Tent at the final trail point, whatever the intensity there."""

    last = trail.points[-1]
    return Marker(x=last.x, y=last.y, kind="tent")


def select_markers(
    cells: Sequence[GridCell],
    geometry: GridGeometry,
    trail: Trail | None = None,
    limit: int = DEFAULT_MAX_MARKERS,
) -> list[Marker]:
    """Pick campfire spots on the most recent high-intensity days.

    Top-tier cells are preferred; the next tier down backfills when there are
    too few. The cell under the tent is skipped.
    """

    if limit <= 0:
        return []

    reserved: set[tuple[float, float]] = set()
    if trail is not None:
        last = trail.points[-1]
        reserved.add((last.x, last.y))

    chosen: dict[tuple[int, int], GridCell] = {}
    for tier in MARKER_TIERS:
        candidates = sorted(
            (cell for cell in cells if cell.day is not None and cell.level == tier),
            key=lambda cell: (cell.column, cell.row),
            reverse=True,
        )
        for cell in candidates:
            if len(chosen) >= limit:
                break
            key = (cell.column, cell.row)
            center = geometry.cell_center(cell.column, cell.row)
            if key in chosen or (center.x, center.y) in reserved:
                continue
            chosen[key] = cell

    markers: list[Marker] = []
    for column, row in sorted(chosen):
        center = geometry.cell_center(column, row)
        markers.append(
            Marker(column=column, row=row, x=center.x, y=center.y, kind="campfire")
        )
    return markers

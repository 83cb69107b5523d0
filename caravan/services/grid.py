from pydantic import BaseModel
from pydantic import ConfigDict

from caravan.models import DAYS_PER_WEEK
from caravan.models import Calendar
from caravan.models import GridCell
from caravan.models import TrailPoint
from caravan.services.thresholds import Thresholds
from caravan.services.thresholds import level_for


class GridGeometry(BaseModel):
    """Pixel sizing of the contribution grid."""

    model_config = ConfigDict(frozen=True)

    cell: int = 12
    gap: int = 3
    pad: int = 18

    @property
    def step(self) -> int:
        return self.cell + self.gap

    def width(self, columns: int) -> int:
        """Canvas width; an empty calendar still gets one column of room."""

        return self.pad * 2 + max(columns, 1) * self.step - self.gap

    def height(self) -> int:
        return self.pad * 2 + DAYS_PER_WEEK * self.step - self.gap

    def cell_origin(self, column: int, row: int) -> tuple[int, int]:
        return self.pad + column * self.step, self.pad + row * self.step

    def cell_center(self, column: int, row: int) -> TrailPoint:
        x, y = self.cell_origin(column, row)
        return TrailPoint(x=x + self.cell / 2, y=y + self.cell / 2)


def build_grid(
    calendar: Calendar, thresholds: Thresholds, geometry: GridGeometry
) -> list[GridCell]:
    """Project every weekday slot onto the grid, column by column."""

    cells: list[GridCell] = []
    for column, week in enumerate(calendar.weeks):
        for row, day in enumerate(week.days):
            x, y = geometry.cell_origin(column, row)
            level = level_for(day.contribution_count, thresholds) if day else 0
            cells.append(
                GridCell(column=column, row=row, x=x, y=y, day=day, level=level)
            )
    return cells

from pydantic import BaseModel
from pydantic import ConfigDict

from caravan.models import GridCell
from caravan.models import Marker
from caravan.models import Trail
from caravan.render.animation import AttributeAnimation
from caravan.render.animation import MotionAnimation


class Scene(BaseModel):
    """Theme-independent content of one caravan image."""

    model_config = ConfigDict(frozen=True)

    login: str
    thresholds: tuple[int, int, int, int]
    width: int
    height: int
    pad: int
    cell_size: int
    cells: tuple[GridCell, ...]
    trail: Trail
    campfires: tuple[Marker, ...]
    tent: Marker
    dash: AttributeAnimation
    motion: MotionAnimation
    fire: AttributeAnimation

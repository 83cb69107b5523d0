from pydantic import BaseModel
from pydantic import ConfigDict

DASH_TRAVEL = 9000


class LoopingAnimation(BaseModel):
    """Backend-neutral description of a repeating animation."""

    model_config = ConfigDict(frozen=True)

    duration_seconds: float
    loop: bool = True


class AttributeAnimation(LoopingAnimation):
    """Cycles an attribute through `values`."""

    attribute: str
    values: tuple[str, ...]


class MotionAnimation(LoopingAnimation):
    """Moves an element along the path with id `path_id`."""

    path_id: str
    rotate: str = "auto"


def dash_flow(duration_seconds: float) -> AttributeAnimation:
    return AttributeAnimation(
        duration_seconds=duration_seconds,
        attribute="stroke-dashoffset",
        values=("0", f"-{DASH_TRAVEL}"),
    )


def follow_path(path_id: str, duration_seconds: float) -> MotionAnimation:
    return MotionAnimation(duration_seconds=duration_seconds, path_id=path_id)


def flicker(duration_seconds: float = 1.6) -> AttributeAnimation:
    return AttributeAnimation(
        duration_seconds=duration_seconds,
        attribute="opacity",
        values=("0.75", "1", "0.85", "0.75"),
    )

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
from pydantic import BaseModel
from pydantic import ConfigDict

from caravan.github_api import GitHubUserNotFoundError
from caravan.github_api import fetch_contribution_calendar
from caravan.github_api import fetch_viewer_login
from caravan.models import Calendar
from caravan.render.animation import dash_flow
from caravan.render.animation import flicker
from caravan.render.animation import follow_path
from caravan.render.palettes import Theme
from caravan.render.palettes import palette_for
from caravan.render.scene import Scene
from caravan.render.svg import MOTION_PATH_ID
from caravan.render.svg import SvgBackend
from caravan.services.grid import GridGeometry
from caravan.services.grid import build_grid
from caravan.services.markers import select_markers
from caravan.services.markers import terminal_marker
from caravan.services.thresholds import build_thresholds
from caravan.services.trail import TrailMode
from caravan.services.trail import animation_duration
from caravan.services.trail import build_trail
from caravan.settings import Settings

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "camping-caravan-{theme}.svg"

__all__ = [
    "CaravanOptions",
    "GitHubAPIError",
    "GitHubUserNotFoundError",
    "InvalidGitHubTokenError",
    "MissingCredentialError",
    "build_scene",
    "generate_caravans",
    "load_calendar",
    "load_viewer_login",
    "render_caravans",
    "write_caravans",
]


class MissingCredentialError(Exception):
    """Raised when no GitHub token is configured."""


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


class CaravanOptions(BaseModel):
    """Explicit inputs of the pure rendering pipeline."""

    model_config = ConfigDict(frozen=True)

    login: str
    trail_mode: TrailMode = TrailMode.SNAKE
    trail_max_points: int = 90
    max_markers: int = 4
    geometry: GridGeometry = GridGeometry()

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> "CaravanOptions":
        values: dict[str, object] = {
            "login": settings.github_login,
            "trail_mode": TrailMode(settings.trail_mode),
            "trail_max_points": settings.trail_max_points,
            "max_markers": settings.max_markers,
        }
        values.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        return cls.model_validate(values)


@contextmanager
def _github_errors() -> Iterator[None]:
    try:
        yield
    except GitHubUserNotFoundError:
        raise
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError(
            f"GitHub responded with status {exc.response.status_code}"
        ) from exc
    except Exception as exc:
        raise GitHubAPIError(str(exc) or "GitHub API request failed") from exc


def load_calendar(login: str, token: str | None, graphql_url: str) -> Calendar:
    """Fetch a calendar, mapping client failures to service errors."""

    if not token:
        raise MissingCredentialError("Missing GITHUB_TOKEN env var.")

    with _github_errors():
        return fetch_contribution_calendar(
            login=login, token=token, graphql_url=graphql_url
        )


def load_viewer_login(token: str, graphql_url: str) -> str:
    """Resolve the login of the token owner."""

    if not token:
        raise MissingCredentialError("GitHub token is required")

    with _github_errors():
        return fetch_viewer_login(token=token, graphql_url=graphql_url)


def build_scene(calendar: Calendar, options: CaravanOptions) -> Scene:
    """Compute everything both themes share: levels, trail and decorations."""

    geometry = options.geometry
    thresholds = build_thresholds(calendar.counts())
    cells = build_grid(calendar, thresholds, geometry)
    columns = len(calendar.weeks)
    trail = build_trail(
        options.trail_mode,
        cells,
        columns,
        geometry,
        max_points=options.trail_max_points,
    )
    campfires = select_markers(cells, geometry, trail=trail, limit=options.max_markers)
    duration = animation_duration(len(trail.points))
    logger.debug(
        "Scene for %s: thresholds=%s trail=%d points duration=%ss",
        options.login,
        thresholds,
        len(trail.points),
        duration,
    )

    return Scene(
        login=options.login,
        thresholds=thresholds,
        width=geometry.width(columns),
        height=geometry.height(),
        pad=geometry.pad,
        cell_size=geometry.cell,
        cells=tuple(cells),
        trail=trail,
        campfires=tuple(campfires),
        tent=terminal_marker(trail),
        dash=dash_flow(duration),
        motion=follow_path(MOTION_PATH_ID, duration),
        fire=flicker(),
    )


def render_caravans(
    calendar: Calendar,
    options: CaravanOptions,
    backend: SvgBackend | None = None,
) -> dict[Theme, str]:
    """Render one document per theme from a single shared scene."""

    backend = backend or SvgBackend()
    scene = build_scene(calendar, options)
    return {theme: backend.render(scene, palette_for(theme)) for theme in Theme}


def write_caravans(documents: dict[Theme, str], output_dir: Path) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for theme, document in documents.items():
        path = output_dir / OUTPUT_FILENAME.format(theme=theme.value)
        path.write_text(document, encoding="utf-8")
        written.append(path)
    return written


def generate_caravans(
    settings: Settings, output_dir: Path, options: CaravanOptions
) -> list[Path]:
    """Fetch, render and write both caravan images."""

    calendar = load_calendar(
        login=options.login,
        token=settings.github_token,
        graphql_url=settings.github_graphql_url,
    )
    documents = render_caravans(calendar, options)
    written = write_caravans(documents, output_dir)
    logger.info("Generated SVGs in %s", output_dir)
    return written

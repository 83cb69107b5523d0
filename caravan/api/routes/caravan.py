from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request
from fastapi import Response

from caravan.api.schemas.caravan import CaravanSummary
from caravan.api.schemas.caravan import MarkerSpot
from caravan.core.ratelimit import SUMMARY_COST
from caravan.core.ratelimit import SVG_RENDER_COST
from caravan.core.ratelimit import RenderBudget
from caravan.core.ratelimit import RenderBudgetExceeded
from caravan.core.security import github_token
from caravan.models import Calendar
from caravan.render.palettes import Theme
from caravan.render.palettes import palette_for
from caravan.render.svg import SvgBackend
from caravan.services.caravan_service import CaravanOptions
from caravan.services.caravan_service import GitHubAPIError
from caravan.services.caravan_service import GitHubUserNotFoundError
from caravan.services.caravan_service import InvalidGitHubTokenError
from caravan.services.caravan_service import build_scene
from caravan.services.caravan_service import load_calendar
from caravan.services.caravan_service import load_viewer_login
from caravan.services.trail import TrailMode
from caravan.settings import Settings


router = APIRouter()
settings = Settings()
backend = SvgBackend()


def get_render_budget(request: Request) -> RenderBudget:
    return request.app.state.render_budget


def _load_caravan(
    token: str,
    budget: RenderBudget,
    cost: int,
    trail_mode: TrailMode | None,
) -> tuple[Calendar, CaravanOptions]:
    """Resolve the token owner, charge their budget, then fetch the calendar."""

    try:
        login = load_viewer_login(token=token, graphql_url=settings.github_graphql_url)
        budget.charge(login, cost)
        calendar = load_calendar(login, token, settings.github_graphql_url)
    except RenderBudgetExceeded as exc:
        raise HTTPException(
            status_code=429,
            detail="Render budget exhausted",
            headers={"Retry-After": str(exc.retry_after)},
        ) from exc
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubUserNotFoundError as exc:
        raise HTTPException(status_code=404, detail="GitHub user not found") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    options = CaravanOptions.from_settings(
        settings, login=login, trail_mode=trail_mode
    )
    return calendar, options


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Camping caravan renderer"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness status for health checks."""

    return {"status": "ok"}


@router.get("/caravan/me.svg")
def get_caravan_svg(
    theme: Theme = Query(default=Theme.DARK),
    trail_mode: TrailMode | None = Query(default=None),
    token: str = Depends(github_token),
    budget: RenderBudget = Depends(get_render_budget),
) -> Response:
    """Render the caravan SVG for the authenticated GitHub user."""

    calendar, options = _load_caravan(token, budget, SVG_RENDER_COST, trail_mode)
    document = backend.render(build_scene(calendar, options), palette_for(theme))
    return Response(
        content=document,
        media_type="image/svg+xml",
        headers={"Cache-Control": "max-age=3600"},
    )


@router.get("/caravan/me")
def get_caravan_summary(
    trail_mode: TrailMode | None = Query(default=None),
    token: str = Depends(github_token),
    budget: RenderBudget = Depends(get_render_budget),
) -> CaravanSummary:
    """Return the computed caravan layout for the authenticated GitHub user."""

    calendar, options = _load_caravan(token, budget, SUMMARY_COST, trail_mode)
    scene = build_scene(calendar, options)
    markers = [*scene.campfires, scene.tent]
    return CaravanSummary(
        username=options.login,
        total=calendar.total(),
        weeks=len(calendar.weeks),
        thresholds=scene.thresholds,
        trail_mode=options.trail_mode,
        trail_points=len(scene.trail.points),
        duration_seconds=scene.motion.duration_seconds,
        markers=[
            MarkerSpot(kind=marker.kind, column=marker.column, row=marker.row)
            for marker in markers
        ],
    )

from fastapi import FastAPI

from caravan.api.routes.caravan import router
from caravan.core.logging_config import configure_logging
from caravan.core.observability import init_sentry
from caravan.core.ratelimit import RenderBudget
from caravan.settings import Settings


def create_app() -> FastAPI:
    """Build the caravan rendering service."""

    app_settings = Settings()
    configure_logging(app_settings.log_level)
    init_sentry(app_settings)

    application = FastAPI(title="camping-caravan")
    application.state.render_budget = RenderBudget(
        budget=app_settings.render_budget,
        window_seconds=app_settings.render_budget_window_seconds,
    )
    application.include_router(router)
    return application


app = create_app()

from typing import Literal

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_login: str = "lakisicaslt"
    github_token: str | None = None
    github_graphql_url: str = "https://api.github.com/graphql"
    output_dir: str = "dist/assets"
    trail_mode: Literal["snake", "highlights"] = "snake"
    trail_max_points: int = 90
    max_markers: int = 4
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    render_budget: int = 30
    render_budget_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from caravan.core.logging_config import configure_logging
from caravan.core.observability import init_sentry
from caravan.core.observability import report_exception
from caravan.services.caravan_service import CaravanOptions
from caravan.services.caravan_service import GitHubAPIError
from caravan.services.caravan_service import GitHubUserNotFoundError
from caravan.services.caravan_service import InvalidGitHubTokenError
from caravan.services.caravan_service import MissingCredentialError
from caravan.services.caravan_service import generate_caravans
from caravan.services.trail import TrailMode
from caravan.settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="camping-caravan",
        description="Render camping caravan SVGs from a GitHub contribution calendar.",
    )
    parser.add_argument("--login", help="GitHub login (defaults to GITHUB_LOGIN)")
    parser.add_argument(
        "--output-dir", help="directory for the SVG files (defaults to OUTPUT_DIR)"
    )
    parser.add_argument(
        "--trail-mode",
        choices=[mode.value for mode in TrailMode],
        help="snake walks every cell, highlights follows recent active days",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        settings = Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.error("Invalid configuration: %s", problems)
        return 1
    configure_logging(settings.log_level)
    init_sentry(settings)

    options = CaravanOptions.from_settings(
        settings, login=args.login, trail_mode=args.trail_mode
    )
    output_dir = Path(args.output_dir or settings.output_dir)

    try:
        written = generate_caravans(settings, output_dir, options)
    except MissingCredentialError as exc:
        logger.error("%s", exc)
        return 1
    except (
        InvalidGitHubTokenError,
        GitHubUserNotFoundError,
        GitHubAPIError,
    ) as exc:
        report_exception(exc)
        logger.error("GitHub GraphQL query failed: %s", str(exc) or type(exc).__name__)
        return 1

    for path in written:
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

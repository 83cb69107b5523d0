import logging
from collections.abc import Mapping
from typing import Any

import httpx

from caravan.models import Calendar

logger = logging.getLogger(__name__)

USER_AGENT = "camping-caravan-generator"

CALENDAR_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""

VIEWER_QUERY = """
query {
  viewer {
    login
  }
}
"""


class GitHubUserNotFoundError(ValueError):
    """Raised when GraphQL resolves the login to no user."""


def _graphql(
    query: str, variables: dict[str, str], token: str, graphql_url: str
) -> Mapping[str, Any]:
    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    response = httpx.post(
        graphql_url,
        json={"query": query, "variables": variables},
        headers={
            "Authorization": f"bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
        timeout=20.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        logger.error("GitHub GraphQL errors: %s", errors)
        raise ValueError("GitHub GraphQL returned errors")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")
    return data


def fetch_viewer_login(token: str, graphql_url: str) -> str:
    """Return the login of the token owner."""

    data = _graphql(VIEWER_QUERY, {}, token, graphql_url)
    viewer = data.get("viewer")
    raw_login = viewer.get("login") if isinstance(viewer, Mapping) else None
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub viewer response is missing required fields")
    return raw_login


def fetch_contribution_calendar(login: str, token: str, graphql_url: str) -> Calendar:
    """Fetch the contribution calendar for a user from GitHub GraphQL API.

    Malformed weeks and days are kept as empty slots rather than rejected.
    """

    logger.info("Fetching contribution calendar for %s", login)
    data = _graphql(CALENDAR_QUERY, {"login": login}, token, graphql_url)

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise GitHubUserNotFoundError(f"GitHub user {login!r} not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    parsed = Calendar.from_raw(weeks)
    logger.debug("Parsed %d weeks for %s", len(parsed.weeks), login)
    return parsed

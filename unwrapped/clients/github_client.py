from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx

USER_AGENT = "github-unwrapped"

UNWRAPPED_QUERY = """
query GitHubUnwrapped($from: DateTime!, $to: DateTime!) {
  viewer {
    login
    name
    avatarUrl
    createdAt
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
            weekday
          }
        }
      }
    }
    repositories(first: 100, ownerAffiliations: OWNER, orderBy: {field: PUSHED_AT, direction: DESC}) {
      nodes {
        name
        primaryLanguage {
          name
        }
      }
    }
  }
}
"""


class GitHubGraphQLError(Exception):
    """Raised when GitHub answers a GraphQL query with an `errors` list."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("; ".join(messages) or "GitHub GraphQL returned errors")


def fetch_viewer_unwrapped(
    token: str,
    graphql_url: str,
    year: int,
) -> Mapping[str, Any]:
    """Fetch profile, contribution calendar and repositories for one year.

    Returns the raw `viewer` object; translating it into typed records is
    left to `services.ingestion`.
    """

    if not token:
        raise ValueError("A GitHub token is required for GraphQL requests")

    variables = {
        "from": f"{date(year, 1, 1).isoformat()}T00:00:00Z",
        "to": f"{date(year, 12, 31).isoformat()}T23:59:59Z",
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }

    response = httpx.post(
        graphql_url,
        json={"query": UNWRAPPED_QUERY, "variables": variables},
        headers=headers,
        timeout=20.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message", ""))
            for error in errors
            if isinstance(error, Mapping)
        ]
        raise GitHubGraphQLError(messages)

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    viewer = data.get("viewer")
    if not isinstance(viewer, Mapping):
        raise ValueError("GitHub viewer is missing")

    return viewer

import logging
from datetime import date

import httpx
from pydantic import ValidationError

from unwrapped.api.schemas.unwrapped import UnwrappedResponse
from unwrapped.clients.github_client import GitHubGraphQLError
from unwrapped.clients.github_client import fetch_viewer_unwrapped
from unwrapped.core.cache import SummaryCache
from unwrapped.services.ingestion import parse_viewer_activity
from unwrapped.stats.errors import StatsError
from unwrapped.stats.summarizer import Summarizer

logger = logging.getLogger(__name__)


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubRateLimitError(Exception):
    """Raised when GitHub refuses a request because of rate limiting."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def cache_key(token: str) -> str:
    return f"github-unwrapped-{token[-8:]}"


def _translate_status_error(exc: httpx.HTTPStatusError) -> Exception:
    status_code = exc.response.status_code
    if status_code == 429 or "rate limit" in exc.response.text.lower():
        return GitHubRateLimitError("GitHub API rate limit exceeded")
    if status_code in {401, 403}:
        return InvalidGitHubTokenError("GitHub token is invalid")
    return GitHubAPIError(f"GitHub responded with status {status_code}")


def _translate_graphql_error(exc: GitHubGraphQLError) -> Exception:
    message = str(exc)
    if "Bad credentials" in message:
        return InvalidGitHubTokenError("GitHub token is invalid")
    if "rate limit" in message.lower():
        return GitHubRateLimitError("GitHub API rate limit exceeded")
    return GitHubAPIError(message)


def _read_cached(cache: SummaryCache, key: str) -> UnwrappedResponse | None:
    try:
        cached = cache.get(key)
    except Exception:
        logger.exception("Summary cache read failed for %s", key)
        return None
    if cached is None:
        return None

    try:
        return UnwrappedResponse.model_validate(cached)
    except ValidationError:
        logger.warning("Discarding unreadable cached summary for %s", key)
        return None


def _write_cached(
    cache: SummaryCache, key: str, response: UnwrappedResponse, ttl_seconds: float
) -> None:
    try:
        cache.set(key, response.model_dump(mode="json"), ttl_seconds)
    except Exception:
        logger.exception("Summary cache write failed for %s", key)


def get_authenticated_user_unwrapped(
    token: str,
    graphql_url: str,
    cache: SummaryCache,
    ttl_seconds: float,
    summarizer: Summarizer | None = None,
    today: date | None = None,
) -> UnwrappedResponse:
    """Build the current-year summary for the GitHub user linked to token.

    Results are cached per token for `ttl_seconds`.

    Raises:
        InvalidGitHubTokenError: If GitHub rejects the token.
        GitHubRateLimitError: If GitHub rate limits the request.
        GitHubAPIError: For any other upstream or data failure.
    """

    key = cache_key(token)
    cached = _read_cached(cache, key)
    if cached is not None:
        logger.debug("Serving cached summary for %s", key)
        return cached

    today = today or date.today()
    year = today.year

    try:
        viewer = fetch_viewer_unwrapped(
            token=token, graphql_url=graphql_url, year=year
        )
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "GitHub request failed with status %s", exc.response.status_code
        )
        raise _translate_status_error(exc) from exc
    except GitHubGraphQLError as exc:
        logger.warning("GitHub GraphQL errors: %s", exc)
        raise _translate_graphql_error(exc) from exc
    except Exception as exc:
        logger.exception("GitHub request failed")
        raise GitHubAPIError("GitHub API request failed") from exc

    try:
        activity = parse_viewer_activity(viewer)
        stats = (summarizer or Summarizer()).summarize(
            activity.days, activity.counters, activity.repositories, today=today
        )
    except StatsError as exc:
        logger.warning("GitHub returned malformed activity data: %s", exc)
        raise GitHubAPIError("GitHub returned malformed activity data") from exc

    response = UnwrappedResponse(year=year, user=activity.user, stats=stats)
    _write_cached(cache, key, response, ttl_seconds)
    return response

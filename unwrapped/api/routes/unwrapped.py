import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials

from unwrapped.api.schemas.unwrapped import SummarizeRequest
from unwrapped.api.schemas.unwrapped import UnwrappedResponse
from unwrapped.core.cache import SummaryCache
from unwrapped.core.security import bearer_scheme
from unwrapped.core.security import extract_github_token
from unwrapped.services.unwrapped_service import GitHubAPIError
from unwrapped.services.unwrapped_service import GitHubRateLimitError
from unwrapped.services.unwrapped_service import InvalidGitHubTokenError
from unwrapped.services.unwrapped_service import get_authenticated_user_unwrapped
from unwrapped.settings import Settings
from unwrapped.stats.summarizer import summarize
from unwrapped.stats.types import StatsSummary


logger = logging.getLogger(__name__)
router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> SummaryCache:
    return request.app.state.cache


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "GitHub Unwrapped"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/unwrapped/me")
def get_my_unwrapped(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    settings: Settings = Depends(get_settings),
    cache: SummaryCache = Depends(get_cache),
) -> UnwrappedResponse:
    """Return this year's summary for the authenticated GitHub user."""

    token = extract_github_token(credentials)

    try:
        return get_authenticated_user_unwrapped(
            token=token,
            graphql_url=settings.github_graphql_url,
            cache=cache,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubRateLimitError as exc:
        raise HTTPException(
            status_code=429, detail="GitHub API rate limit exceeded"
        ) from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc


@router.post("/unwrapped/summarize")
def summarize_activity(payload: SummarizeRequest) -> StatsSummary:
    """Summarize activity data that was already fetched elsewhere."""

    logger.debug("Summarizing %d supplied days", len(payload.days))
    return summarize(payload.days, payload.counters, payload.repositories)

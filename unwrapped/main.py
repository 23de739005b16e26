from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse

from unwrapped.api.routes.unwrapped import router
from unwrapped.core.cache import SummaryCache
from unwrapped.core.cache import build_cache
from unwrapped.core.middleware import GitHubQuotaRateLimitMiddleware
from unwrapped.core.observability import configure_logging
from unwrapped.core.observability import init_sentry
from unwrapped.settings import Settings
from unwrapped.stats.errors import EmptyInputError


async def empty_input_handler(request: Request, exc: EmptyInputError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(
    settings: Settings | None = None, cache: SummaryCache | None = None
) -> FastAPI:
    """Build the application with logging, Sentry, caching and rate limiting."""

    settings = settings or Settings()
    configure_logging(settings)
    init_sentry(settings)

    app = FastAPI(title="GitHub Unwrapped")
    app.state.settings = settings
    app.state.cache = cache if cache is not None else build_cache(settings.database_url)

    app.add_middleware(
        GitHubQuotaRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_exception_handler(EmptyInputError, empty_input_handler)
    app.include_router(router)
    return app


app = create_app()

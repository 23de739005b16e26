import logging
import math
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from unwrapped.core.security import token_from_authorization
from unwrapped.services.unwrapped_service import cache_key

logger = logging.getLogger(__name__)

LIMITED_PATH = "/unwrapped/me"
MAX_TRACKED_CLIENTS = 1024


class GitHubQuotaRateLimitMiddleware(BaseHTTPMiddleware):
    """Limit GET /unwrapped/me requests that would spend GitHub API quota.

    Requests are counted per token, using the same key as the summary
    cache. A request the cache can already answer is never counted.
    Requests without a token fall back to the client address.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        max_tracked_clients: int = MAX_TRACKED_CLIENTS,
    ) -> None:
        super().__init__(app)
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        self.max_tracked_clients = max(1, max_tracked_clients)
        self._windows: dict[str, deque[float]] = {}
        self._lock = RLock()

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path != LIMITED_PATH:
            return await call_next(request)

        token = token_from_authorization(request.headers.get("authorization"))
        if token is not None:
            key = cache_key(token)
            if self._is_cached(request, key):
                return await call_next(request)
        else:
            key = f"address:{client_address(request)}"

        retry_after = self.reserve(key, monotonic())
        if retry_after is not None:
            logger.info("Rate limited %s for %ss", key, retry_after)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many uncached summary requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def reserve(self, key: str, now: float) -> int | None:
        """Count a request for key, or return seconds until one is allowed."""

        cutoff = now - self.window_seconds
        with self._lock:
            if key not in self._windows and (
                len(self._windows) >= self.max_tracked_clients
            ):
                self._forget_idle(cutoff)

            window = self._windows.setdefault(key, deque())
            while window and window[0] <= cutoff:
                window.popleft()

            if len(window) >= self.max_requests:
                return max(1, math.ceil(window[0] - cutoff))

            window.append(now)
            return None

    def _forget_idle(self, cutoff: float) -> None:
        idle = [key for key, window in self._windows.items() if window[-1] <= cutoff]
        for key in idle:
            del self._windows[key]

    @staticmethod
    def _is_cached(request: Request, key: str) -> bool:
        cache = getattr(request.app.state, "cache", None)
        if cache is None:
            return False
        try:
            return cache.get(key) is not None
        except Exception:
            logger.exception("Summary cache lookup failed for %s", key)
            return False


def client_address(request: Request) -> str:
    # Reverse proxies put the original client first in X-Forwarded-For.
    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"

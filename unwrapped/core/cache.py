"""Key-value caches for computed summaries.

The stats core knows nothing about caching. The service layer talks to a
`SummaryCache`, so the backing store can change without touching it.
"""

from collections.abc import Callable
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from threading import RLock
from time import time
from typing import Any
from typing import Protocol

from sqlalchemy import Engine
from sqlalchemy import delete
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from unwrapped.db import Base
from unwrapped.db import get_engine
from unwrapped.models import CachedSummary

SWEEP_THRESHOLD = 100


class SummaryCache(Protocol):
    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any], ttl_seconds: float) -> None: ...

    def clear(self, pattern: str | None = None) -> None: ...


class InMemoryCache:
    """Process-local cache with absolute per-entry expiry."""

    def __init__(self, clock: Callable[[], float] = time) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: dict[str, Any], ttl_seconds: float) -> None:
        with self._lock:
            now = self._clock()
            self._entries[key] = (now + ttl_seconds, value)
            if len(self._entries) > SWEEP_THRESHOLD:
                expired = [k for k, (exp, _) in self._entries.items() if exp <= now]
                for expired_key in expired:
                    del self._entries[expired_key]

    def clear(self, pattern: str | None = None) -> None:
        with self._lock:
            if pattern is None:
                self._entries.clear()
                return
            for key in [key for key in self._entries if pattern in key]:
                del self._entries[key]


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlCache:
    """Cache stored in the `summary_cache` table."""

    def __init__(
        self, engine: Engine, clock: Callable[[], datetime] | None = None
    ) -> None:
        Base.metadata.create_all(bind=engine, tables=[CachedSummary.__table__])
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, autocommit=False
        )
        self._clock = clock or (lambda: datetime.now(UTC))

    def get(self, key: str) -> dict[str, Any] | None:
        with self._session_factory() as db:
            entry = db.get(CachedSummary, key)
            if entry is None:
                return None
            if _as_utc(entry.expires_at) <= self._clock():
                db.delete(entry)
                db.commit()
                return None
            return entry.payload

    def set(self, key: str, value: dict[str, Any], ttl_seconds: float) -> None:
        expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        with self._session_factory() as db:
            db.merge(CachedSummary(key=key, payload=value, expires_at=expires_at))
            db.commit()

    def clear(self, pattern: str | None = None) -> None:
        statement = delete(CachedSummary)
        if pattern is not None:
            statement = statement.where(CachedSummary.key.contains(pattern))
        with self._session_factory() as db:
            db.execute(statement)
            db.commit()

    def keys(self) -> list[str]:
        with self._session_factory() as db:
            keys = db.scalars(select(CachedSummary.key).order_by(CachedSummary.key))
            return list(keys)


def build_cache(database_url: str | None) -> SummaryCache:
    """Use the database when one is configured, process memory otherwise."""

    if database_url:
        return SqlCache(get_engine(database_url))
    return InMemoryCache()

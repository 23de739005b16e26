from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


@lru_cache
def get_engine(database_url: str) -> Engine:
    """Create (once per URL) the engine backing the summary cache table."""

    if not database_url:
        raise RuntimeError("DATABASE_URL is not set")
    return create_engine(database_url)

import math
from collections.abc import Callable
from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike Python's banker's rounding."""

    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def top_ranked(
    items: Iterable[T], key: Callable[[T], float], limit: int | None = None
) -> list[T]:
    """Sort descending by key, keeping input order on ties, and cut to limit."""

    # sorted() is stable, and reverse=True preserves the order of equal keys.
    ranked = sorted(items, key=key, reverse=True)
    if limit is not None:
        return ranked[:limit]
    return ranked

from collections.abc import Sequence
from datetime import date

from unwrapped.stats.types import DailyRecord
from unwrapped.stats.types import Streak


def find_longest_streak(
    days: Sequence[DailyRecord], today: date | None = None
) -> Streak:
    """Return the longest run of consecutive days with contributions.

    `days` must already be sorted by date. Any zero-count day ends a run.
    When several runs share the maximum length, the earliest one is kept.
    Without any active day the streak is 0 and both dates are set to
    `today`, which callers must not treat as meaningful.
    """

    longest = 0
    current = 0
    current_start: date | None = None
    best_start: date | None = None
    best_end: date | None = None

    for day in days:
        if day.count <= 0:
            current = 0
            continue

        if current == 0:
            current_start = day.date
        current += 1

        # Strict comparison keeps the first run that reached the maximum.
        if current > longest:
            longest = current
            best_start = current_start
            best_end = day.date

    if best_start is None or best_end is None:
        fallback = today or date.today()
        return Streak(days=0, start_date=fallback, end_date=fallback)

    return Streak(days=longest, start_date=best_start, end_date=best_end)

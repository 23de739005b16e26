"""Heuristic estimators for time-of-day and session-length statistics.

Only day-level counts are available, so both estimates are coarse
approximations. They sit behind small protocols so an implementation
fed with real commit timestamps can be swapped in through `Summarizer`.
"""

from collections.abc import Sequence
from typing import Protocol

from unwrapped.stats.ranking import round_half_up
from unwrapped.stats.types import ActiveTime
from unwrapped.stats.types import CodingPattern
from unwrapped.stats.types import DailyRecord

WEEKEND_HOUR = 14
WEEKDAY_HOUR = 10
WEEKEND_DAYS = frozenset({0, 6})

HOURS_PER_CONTRIBUTION = 0.5
MIN_HOURS = 2.0
MAX_HOURS = 12.0

MARATHON_CODER = "Marathon coder"
STEADY_CONTRIBUTOR = "Steady contributor"
FOCUSED_SPRINTS = "Focused sprints"


class ActiveTimeEstimator(Protocol):
    def estimate(self, days: Sequence[DailyRecord]) -> ActiveTime: ...


class PatternEstimator(Protocol):
    def estimate(self, days: Sequence[DailyRecord]) -> CodingPattern: ...


class WeekdayActiveTimeEstimator:
    """Guess the most active hour from the busiest weekday.

    Weekend winners map to 14:00, weekday winners to 10:00. Low fidelity.
    """

    def estimate(self, days: Sequence[DailyRecord]) -> ActiveTime:
        totals: dict[int, int] = {}
        for day in days:
            totals[day.weekday] = totals.get(day.weekday, 0) + day.count

        if not totals:
            return ActiveTime(hour=WEEKDAY_HOUR, count=0)

        best_weekday = None
        best_total = 0
        for weekday in sorted(totals):
            if best_weekday is None or totals[weekday] > best_total:
                best_weekday = weekday
                best_total = totals[weekday]

        hour = WEEKEND_HOUR if best_weekday in WEEKEND_DAYS else WEEKDAY_HOUR
        return ActiveTime(hour=hour, count=best_total)


def pattern_label(hours: float) -> str:
    if hours > 8:
        return MARATHON_CODER
    if hours > 4:
        return STEADY_CONTRIBUTOR
    return FOCUSED_SPRINTS


class IntensityPatternEstimator:
    """Estimate session length from the mean count of active days."""

    def estimate(self, days: Sequence[DailyRecord]) -> CodingPattern:
        active_counts = [day.count for day in days if day.count > 0]
        mean = sum(active_counts) / len(active_counts) if active_counts else 0.0

        hours = min(max(mean * HOURS_PER_CONTRIBUTION, MIN_HOURS), MAX_HOURS)
        # The label is picked before rounding the reported hours.
        return CodingPattern(
            average_hours=round_half_up(hours, 1), pattern=pattern_label(hours)
        )

from collections.abc import Iterable
from datetime import date

from unwrapped.stats.busiest import find_busiest_day
from unwrapped.stats.estimators import ActiveTimeEstimator
from unwrapped.stats.estimators import IntensityPatternEstimator
from unwrapped.stats.estimators import PatternEstimator
from unwrapped.stats.estimators import WeekdayActiveTimeEstimator
from unwrapped.stats.languages import rank_languages
from unwrapped.stats.languages import unknown_language
from unwrapped.stats.monthly import monthly_activity
from unwrapped.stats.streaks import find_longest_streak
from unwrapped.stats.types import AggregateCounters
from unwrapped.stats.types import DailyRecord
from unwrapped.stats.types import RepositorySummary
from unwrapped.stats.types import StatsSummary


class Summarizer:
    """Combine every derived statistic into one `StatsSummary`.

    Holds no state between calls; the estimators can be replaced with
    implementations that have access to real commit timestamps.
    """

    def __init__(
        self,
        active_time_estimator: ActiveTimeEstimator | None = None,
        pattern_estimator: PatternEstimator | None = None,
    ) -> None:
        self.active_time_estimator = (
            active_time_estimator or WeekdayActiveTimeEstimator()
        )
        self.pattern_estimator = pattern_estimator or IntensityPatternEstimator()

    def summarize(
        self,
        days: Iterable[DailyRecord],
        counters: AggregateCounters,
        repositories: Iterable[RepositorySummary],
        today: date | None = None,
    ) -> StatsSummary:
        """Derive the summary for one year of daily records.

        Raises:
            EmptyInputError: If `days` is empty.
        """

        sorted_days = sorted(days, key=lambda day: day.date)
        language_stats = rank_languages(repositories)

        return StatsSummary(
            total_contributions=counters.total,
            top_language=language_stats[0] if language_stats else unknown_language(),
            longest_streak=find_longest_streak(sorted_days, today=today),
            most_active_time=self.active_time_estimator.estimate(sorted_days),
            commit_type_breakdown=counters,
            busiest_day=find_busiest_day(sorted_days),
            pattern=self.pattern_estimator.estimate(sorted_days),
            monthly_activity=tuple(monthly_activity(sorted_days)),
            language_stats=tuple(language_stats),
        )


def summarize(
    days: Iterable[DailyRecord],
    counters: AggregateCounters,
    repositories: Iterable[RepositorySummary],
    today: date | None = None,
) -> StatsSummary:
    """Summarize with the default day-level estimators."""

    return Summarizer().summarize(days, counters, repositories, today=today)

"""Immutable record types consumed and produced by the stats aggregator.

Everything here is constructed once from upstream data and never mutated.
Field constraints only describe well-formed input; rejecting bad upstream
data is the job of the ingestion boundary (see `services.ingestion`).
"""

from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class DailyRecord(FrozenModel):
    """One calendar day of contribution activity."""

    date: date
    count: int = Field(ge=0)
    # 0 = Sunday, as supplied by GitHub; not cross-checked against `date`.
    weekday: int = Field(ge=0, le=6)


class RepositorySummary(FrozenModel):
    name: str = ""
    primary_language_name: str | None = None


class AggregateCounters(FrozenModel):
    """Yearly totals passed through verbatim into the summary."""

    commits: int = Field(default=0, ge=0)
    pull_requests: int = Field(default=0, ge=0)
    issues: int = Field(default=0, ge=0)
    reviews: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.commits + self.pull_requests + self.issues + self.reviews


class LanguageShare(FrozenModel):
    name: str
    percentage: int
    color: str


class Streak(FrozenModel):
    days: int
    start_date: date
    end_date: date


class ActiveTime(FrozenModel):
    hour: int = Field(ge=0, le=23)
    count: int


class BusiestDay(FrozenModel):
    date: date
    count: int


class CodingPattern(FrozenModel):
    average_hours: float
    pattern: str


class MonthlyActivity(FrozenModel):
    month: str
    contributions: int


class StatsSummary(FrozenModel):
    """Flat result record handed to the presentation layer."""

    total_contributions: int
    top_language: LanguageShare
    longest_streak: Streak
    most_active_time: ActiveTime
    commit_type_breakdown: AggregateCounters
    busiest_day: BusiestDay
    pattern: CodingPattern
    monthly_activity: tuple[MonthlyActivity, ...]
    language_stats: tuple[LanguageShare, ...]

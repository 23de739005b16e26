from pydantic import BaseModel
from pydantic import field_validator

from unwrapped.services.ingestion import GitHubUser
from unwrapped.stats.types import AggregateCounters
from unwrapped.stats.types import DailyRecord
from unwrapped.stats.types import RepositorySummary
from unwrapped.stats.types import StatsSummary


class UnwrappedResponse(BaseModel):
    """Yearly summary for the authenticated GitHub user."""

    year: int
    user: GitHubUser
    stats: StatsSummary


class SummarizeRequest(BaseModel):
    """Pre-ingested activity data to summarize without calling GitHub."""

    days: list[DailyRecord]
    counters: AggregateCounters = AggregateCounters()
    repositories: list[RepositorySummary] = []

    @field_validator("days")
    @classmethod
    def reject_duplicate_dates(cls, days: list[DailyRecord]) -> list[DailyRecord]:
        if len({day.date for day in days}) != len(days):
            raise ValueError("days must not contain duplicate dates")
        return days

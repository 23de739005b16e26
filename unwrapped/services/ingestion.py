"""Translate raw GitHub GraphQL `viewer` data into validated records.

This is the only place upstream data is checked. The stats core assumes
every record it receives is well formed.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from unwrapped.stats.errors import MalformedRecordError
from unwrapped.stats.types import AggregateCounters
from unwrapped.stats.types import DailyRecord
from unwrapped.stats.types import FrozenModel
from unwrapped.stats.types import RepositorySummary


class GitHubUser(FrozenModel):
    login: str
    name: str
    avatar_url: str | None = None
    created_at: str | None = None


class ViewerActivity(FrozenModel):
    user: GitHubUser
    days: tuple[DailyRecord, ...]
    counters: AggregateCounters
    repositories: tuple[RepositorySummary, ...]


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MalformedRecordError(f"{what} is missing or invalid")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise MalformedRecordError(f"{what} is missing or invalid")
    return value


def _count(value: Any, what: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MalformedRecordError(f"{what} must be a non-negative integer")
    return value


def parse_daily_record(raw_day: Mapping[str, Any]) -> DailyRecord:
    raw_date = raw_day.get("date")
    if not isinstance(raw_date, str):
        raise MalformedRecordError("contribution day date is missing")
    try:
        parsed_day = date.fromisoformat(raw_date)
    except ValueError as exc:
        raise MalformedRecordError(f"invalid contribution date {raw_date!r}") from exc

    count = _count(raw_day.get("contributionCount"), f"count for {raw_date}")
    weekday = raw_day.get("weekday")
    if not isinstance(weekday, int) or isinstance(weekday, bool):
        raise MalformedRecordError(f"weekday for {raw_date} is missing")

    try:
        return DailyRecord(date=parsed_day, count=count, weekday=weekday)
    except ValidationError as exc:
        raise MalformedRecordError(f"invalid contribution day {raw_date}") from exc


def parse_contribution_days(calendar: Mapping[str, Any]) -> list[DailyRecord]:
    days: list[DailyRecord] = []
    seen: set[date] = set()
    for week in _list(calendar.get("weeks"), "contribution weeks"):
        week = _mapping(week, "contribution week")
        for raw_day in _list(week.get("contributionDays"), "contribution days"):
            record = parse_daily_record(_mapping(raw_day, "contribution day"))
            if record.date in seen:
                raise MalformedRecordError(f"duplicate contribution date {record.date}")
            seen.add(record.date)
            days.append(record)
    return days


def parse_counters(collection: Mapping[str, Any]) -> AggregateCounters:
    return AggregateCounters(
        commits=_count(collection.get("totalCommitContributions"), "commits"),
        pull_requests=_count(
            collection.get("totalPullRequestContributions"), "pull requests"
        ),
        issues=_count(collection.get("totalIssueContributions"), "issues"),
        reviews=_count(
            collection.get("totalPullRequestReviewContributions"), "reviews"
        ),
    )


def parse_repositories(repositories: Mapping[str, Any]) -> list[RepositorySummary]:
    summaries: list[RepositorySummary] = []
    for node in _list(repositories.get("nodes"), "repository nodes"):
        if node is None:
            continue
        node = _mapping(node, "repository")
        language = node.get("primaryLanguage")
        language_name = language.get("name") if isinstance(language, Mapping) else None
        summaries.append(
            RepositorySummary(
                name=str(node.get("name") or ""),
                primary_language_name=(
                    language_name if isinstance(language_name, str) else None
                ),
            )
        )
    return summaries


def parse_user(viewer: Mapping[str, Any]) -> GitHubUser:
    login = viewer.get("login")
    if not isinstance(login, str) or not login:
        raise MalformedRecordError("viewer login is missing")

    name = viewer.get("name")
    avatar_url = viewer.get("avatarUrl")
    created_at = viewer.get("createdAt")
    return GitHubUser(
        login=login,
        name=name if isinstance(name, str) and name else login,
        avatar_url=avatar_url if isinstance(avatar_url, str) else None,
        created_at=created_at if isinstance(created_at, str) else None,
    )


def parse_viewer_activity(viewer: Mapping[str, Any]) -> ViewerActivity:
    """Build typed activity records from a GraphQL `viewer` object.

    Raises:
        MalformedRecordError: If any required field is missing or invalid.
    """

    collection = _mapping(
        viewer.get("contributionsCollection"), "contributionsCollection"
    )
    calendar = _mapping(
        collection.get("contributionCalendar"), "contributionCalendar"
    )
    repositories = _mapping(viewer.get("repositories"), "repositories")

    return ViewerActivity(
        user=parse_user(viewer),
        days=tuple(parse_contribution_days(calendar)),
        counters=parse_counters(collection),
        repositories=tuple(parse_repositories(repositories)),
    )

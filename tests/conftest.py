from datetime import date
from datetime import timedelta

import pytest

from unwrapped.stats.types import DailyRecord


def github_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def build_days(start: date, counts: list[int]) -> list[DailyRecord]:
    return [
        DailyRecord(
            date=start + timedelta(days=offset),
            count=count,
            weekday=github_weekday(start + timedelta(days=offset)),
        )
        for offset, count in enumerate(counts)
    ]


@pytest.fixture
def make_days():
    """Factory for consecutive daily records starting at a given date."""

    return build_days


@pytest.fixture
def viewer_payload() -> dict[str, object]:
    """Raw GraphQL `viewer` object covering the first week of 2024."""

    start = date(2024, 1, 1)
    counts = [3, 0, 5, 5, 1, 0, 2]
    contribution_days = [
        {
            "date": (start + timedelta(days=offset)).isoformat(),
            "contributionCount": count,
            "weekday": github_weekday(start + timedelta(days=offset)),
        }
        for offset, count in enumerate(counts)
    ]
    return {
        "login": "octocat",
        "name": "The Octocat",
        "avatarUrl": "https://avatars.githubusercontent.com/u/583231",
        "createdAt": "2011-01-25T18:44:36Z",
        "contributionsCollection": {
            "totalCommitContributions": 10,
            "totalIssueContributions": 2,
            "totalPullRequestContributions": 3,
            "totalPullRequestReviewContributions": 1,
            "contributionCalendar": {
                "totalContributions": 16,
                "weeks": [
                    {"contributionDays": contribution_days[:6]},
                    {"contributionDays": contribution_days[6:]},
                ],
            },
        },
        "repositories": {
            "nodes": [
                {"name": "hello", "primaryLanguage": {"name": "Go"}},
                {"name": "world", "primaryLanguage": {"name": "Go"}},
                {"name": "tools", "primaryLanguage": {"name": "Rust"}},
                {"name": "notes", "primaryLanguage": None},
            ]
        },
    }

from collections.abc import Sequence

from unwrapped.stats.types import DailyRecord
from unwrapped.stats.types import MonthlyActivity

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def monthly_activity(days: Sequence[DailyRecord]) -> list[MonthlyActivity]:
    """Total contributions per month, in order of first appearance."""

    totals: dict[str, int] = {}
    for day in days:
        month = MONTH_ABBREVIATIONS[day.date.month - 1]
        totals[month] = totals.get(month, 0) + day.count

    return [
        MonthlyActivity(month=month, contributions=contributions)
        for month, contributions in totals.items()
    ]

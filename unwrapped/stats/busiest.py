from collections.abc import Sequence

from unwrapped.stats.errors import EmptyInputError
from unwrapped.stats.types import BusiestDay
from unwrapped.stats.types import DailyRecord


def find_busiest_day(days: Sequence[DailyRecord]) -> BusiestDay:
    """Return the day with the highest count; the first one wins on ties.

    Raises:
        EmptyInputError: If `days` is empty.
    """

    if not days:
        raise EmptyInputError("busiest day requires at least one daily record")

    busiest = days[0]
    for day in days[1:]:
        if day.count > busiest.count:
            busiest = day

    return BusiestDay(date=busiest.date, count=busiest.count)

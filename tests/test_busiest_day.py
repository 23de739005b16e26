from datetime import date

import pytest

from unwrapped.stats.busiest import find_busiest_day
from unwrapped.stats.errors import EmptyInputError


def test_returns_day_with_highest_count(make_days) -> None:
    days = make_days(date(2024, 2, 1), [1, 9, 4, 0])

    busiest = find_busiest_day(days)

    assert busiest.date == date(2024, 2, 2)
    assert busiest.count == 9


def test_first_of_equal_maxima_wins(make_days) -> None:
    days = make_days(date(2024, 2, 1), [3, 8, 2, 8, 8])

    assert find_busiest_day(days).date == date(2024, 2, 2)


def test_all_zero_returns_first_day(make_days) -> None:
    days = make_days(date(2023, 1, 1), [0] * 365)

    busiest = find_busiest_day(days)

    assert busiest.date == date(2023, 1, 1)
    assert busiest.count == 0


def test_empty_sequence_raises() -> None:
    with pytest.raises(EmptyInputError):
        find_busiest_day([])

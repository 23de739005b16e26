import random
from datetime import date

from unwrapped.stats.streaks import find_longest_streak


def brute_force_longest_run(counts: list[int]) -> int:
    longest = 0
    for start in range(len(counts)):
        length = 0
        while start + length < len(counts) and counts[start + length] > 0:
            length += 1
        longest = max(longest, length)
    return longest


def test_earliest_of_equal_runs_is_reported(make_days) -> None:
    days = make_days(date(2024, 1, 7), [1, 1, 1, 0, 1, 1, 1])

    streak = find_longest_streak(days)

    assert streak.days == 3
    assert streak.start_date == date(2024, 1, 7)
    assert streak.end_date == date(2024, 1, 9)


def test_longer_later_run_replaces_earlier_run(make_days) -> None:
    days = make_days(date(2024, 3, 1), [2, 2, 0, 1, 1, 1, 0, 4])

    streak = find_longest_streak(days)

    assert streak.days == 3
    assert streak.start_date == date(2024, 3, 4)
    assert streak.end_date == date(2024, 3, 6)


def test_single_zero_day_breaks_streak(make_days) -> None:
    days = make_days(date(2024, 5, 1), [5, 5, 5, 5, 0, 5, 5, 5, 5])

    assert find_longest_streak(days).days == 4


def test_all_zero_year_uses_processing_date_sentinel(make_days) -> None:
    today = date(2024, 12, 31)
    days = make_days(date(2023, 1, 1), [0] * 365)

    streak = find_longest_streak(days, today=today)

    assert streak.days == 0
    assert streak.start_date == today
    assert streak.end_date == today


def test_empty_sequence_has_zero_streak() -> None:
    assert find_longest_streak([], today=date(2024, 6, 1)).days == 0


def test_streak_matches_brute_force_for_random_years(make_days) -> None:
    rng = random.Random(1234)
    for _ in range(25):
        counts = [rng.choice([0, 0, 1, 2, 7]) for _ in range(366)]
        days = make_days(date(2024, 1, 1), counts)

        streak = find_longest_streak(days, today=date(2025, 1, 1))

        assert streak.days == brute_force_longest_run(counts)
        if streak.days:
            assert (streak.end_date - streak.start_date).days == streak.days - 1

"""Tests for streak calculations."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from dateutil import tz

from journal_streaks.model import JournalEntry, StreakResult
from journal_streaks.streaks import (
    MILESTONES,
    calculate_current_streak,
    calculate_streaks,
    entry_timestamp,
    find_longest_streak,
    is_streak_active,
    next_milestone,
    streak_status_message,
    unique_days,
)

TODAY = date(2025, 9, 21)


def _entry(day: str, hour: int = 10) -> JournalEntry:
    moment = datetime.fromisoformat(day).replace(hour=hour, tzinfo=timezone.utc)
    return JournalEntry(entry_id=f"entry-{day}-{hour}", created_at=moment)


def _entries(*days: str) -> list[JournalEntry]:
    return [_entry(day) for day in days]


def test_scenario_two_consecutive_days() -> None:
    result = calculate_streaks(_entries("2025-09-20", "2025-09-21"), today=TODAY)
    assert result.current_streak == 2
    assert result.longest_streak == 2
    assert result.last_entry_date == date(2025, 9, 21)
    assert result.streak_dates == (date(2025, 9, 20), date(2025, 9, 21))


def test_scenario_gap_breaks_streak() -> None:
    result = calculate_streaks(_entries("2025-09-19", "2025-09-21"), today=TODAY)
    assert result.current_streak == 1
    assert result.longest_streak == 1
    assert result.streak_dates == (date(2025, 9, 21),)


def test_scenario_two_missed_days_resets_current_streak() -> None:
    entries = _entries("2025-09-18", "2025-09-19", "2025-09-20", "2025-09-21")
    result = calculate_streaks(entries, today=date(2025, 9, 23))
    assert result.current_streak == 0
    assert result.longest_streak == 4
    assert result.streak_dates == ()
    assert result.last_entry_date == date(2025, 9, 21)


def test_scenario_empty_input() -> None:
    assert calculate_streaks([], today=TODAY) == StreakResult()
    assert calculate_streaks(None, today=TODAY).as_dict() == {
        "currentStreak": 0,
        "longestStreak": 0,
        "lastEntryDate": None,
        "streakDates": [],
    }


def test_streak_survives_until_a_full_day_is_missed() -> None:
    result = calculate_streaks(_entries("2025-09-19", "2025-09-20"), today=TODAY)
    assert result.current_streak == 2
    assert result.streak_dates == (date(2025, 9, 19), date(2025, 9, 20))


def test_streak_crosses_year_boundary() -> None:
    entries = _entries("2024-12-30", "2024-12-31", "2025-01-01")
    result = calculate_streaks(entries, today=date(2025, 1, 1))
    assert result.current_streak == 3
    assert result.longest_streak == 3


def test_unique_days_collapses_same_day_entries() -> None:
    entries = [
        {"_id": "a", "createdAt": "2025-09-21T08:00:00Z"},
        {"_id": "b", "createdAt": "2025-09-21T22:00:00Z"},
        {"_id": "c", "createdAt": "2025-09-19T12:00:00Z"},
    ]
    assert unique_days(entries) == [date(2025, 9, 21), date(2025, 9, 19)]
    assert unique_days([]) == []


def test_unique_days_respects_reference_zone() -> None:
    entries = [{"_id": "a", "createdAt": "2025-09-22T01:30:00Z"}]
    ba = tz.gettz("America/Argentina/Buenos_Aires")
    assert unique_days(entries) == [date(2025, 9, 22)]
    assert unique_days(entries, ba) == [date(2025, 9, 21)]


def test_entry_timestamp_requires_created_at() -> None:
    assert entry_timestamp({"created_at": "2025-09-21"}) == "2025-09-21"
    with pytest.raises(ValueError, match="createdAt"):
        entry_timestamp({"_id": "x"})


def test_calculate_current_streak_empty_and_stale() -> None:
    assert calculate_current_streak([], today=TODAY).streak == 0
    stale = [date(2025, 9, 10), date(2025, 9, 9)]
    current = calculate_current_streak(stale, today=TODAY)
    assert current.streak == 0
    assert current.dates == ()


def test_find_longest_streak_picks_longest_run() -> None:
    days = [
        date(2025, 9, 25),
        date(2025, 9, 24),
        date(2025, 9, 22),
        date(2025, 9, 21),
        date(2025, 9, 20),
        date(2025, 9, 1),
    ]
    assert find_longest_streak(days) == 3
    assert find_longest_streak([date(2025, 9, 1)]) == 1
    assert find_longest_streak([]) == 0


@pytest.mark.parametrize(
    "offsets",
    [
        [0],
        [1, 2, 3],
        [0, 1, 2, 5, 6, 7, 8],
        [3, 4, 5, 6],
        [0, 2, 4, 6],
        [1, 10, 11, 12, 13, 14],
    ],
)
def test_invariants_hold(offsets: list[int]) -> None:
    entries = [_entry((TODAY - timedelta(days=o)).isoformat()) for o in offsets]
    result = calculate_streaks(entries, today=TODAY)
    assert result.current_streak <= result.longest_streak
    assert len(result.streak_dates) == result.current_streak
    for earlier, later in zip(result.streak_dates, result.streak_dates[1:]):
        assert later - earlier == timedelta(days=1)


def test_calculation_does_not_mutate_input_and_is_repeatable() -> None:
    entries = _entries("2025-09-21", "2025-09-19", "2025-09-20")
    snapshot = list(entries)
    first = calculate_streaks(entries, today=TODAY)
    second = calculate_streaks(entries, today=TODAY)
    assert entries == snapshot
    assert first == second


def test_is_streak_active() -> None:
    assert is_streak_active(_entries("2025-09-20"), today=TODAY) is True
    assert is_streak_active(_entries("2025-09-21"), today=TODAY) is True
    assert is_streak_active(_entries("2025-09-19", "2025-09-10"), today=TODAY) is False
    assert is_streak_active([], today=TODAY) is False
    assert is_streak_active(iter([]), today=TODAY) is False


def test_is_streak_active_uses_most_recent_day() -> None:
    future_latest = [{"createdAt": "2025-09-21"}, {"createdAt": "2025-09-22"}]
    assert is_streak_active(future_latest, today=TODAY) is False
    assert is_streak_active([{"createdAt": "2025-09-20T12:00:00Z"}], today=TODAY)


def test_is_streak_active_truncates_in_reference_zone() -> None:
    ba = tz.gettz("America/Argentina/Buenos_Aires")
    # 01:30 UTC del 22 es todavía el 21 en Buenos Aires.
    entries = [{"createdAt": "2025-09-22T01:30:00Z"}]
    assert is_streak_active(entries, today=TODAY) is False
    assert is_streak_active(entries, today=TODAY, tzinfo=ba) is True


@pytest.mark.parametrize(
    ("streak", "days_until", "milestone"),
    [
        (0, 5, 5),
        (4, 1, 5),
        (5, 5, 10),
        (365, 135, 500),
        (999, 1, 1000),
        (1000, 100, 1100),
        (1050, 50, 1100),
        (1100, 100, 1200),
    ],
)
def test_next_milestone(streak: int, days_until: int, milestone: int) -> None:
    projection = next_milestone(streak)
    assert projection.days_until == days_until
    assert projection.milestone == milestone


def test_next_milestone_custom_list_and_negative() -> None:
    assert next_milestone(3, (3, 7)).milestone == 7
    assert MILESTONES[-1] == 1000
    with pytest.raises(ValueError, match=">= 0"):
        next_milestone(-1)


def test_status_messages() -> None:
    assert streak_status_message(StreakResult(), today=TODAY) == (
        "Start your journaling streak today! ✨"
    )
    one_today = StreakResult(1, 1, TODAY, (TODAY,))
    assert streak_status_message(one_today, today=TODAY).startswith("Great start!")
    yesterday = date(2025, 9, 20)
    one_yesterday = StreakResult(1, 3, yesterday, (yesterday,))
    assert streak_status_message(one_yesterday, today=TODAY).startswith(
        "1 day streak - write today"
    )
    many_today = StreakResult(4, 4, TODAY, ())
    assert streak_status_message(many_today, today=TODAY) == (
        "Amazing! 4 day streak! 🔥"
    )
    many_yesterday = StreakResult(4, 4, yesterday, ())
    assert streak_status_message(many_yesterday, today=TODAY) == (
        "4 day streak - write today to continue! 🔥"
    )

"""Cálculo de rachas de escritura (días consecutivos con entradas)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, tzinfo

from journal_streaks.days import UTC, add_days, days_between, to_day
from journal_streaks.model import (
    CurrentStreak,
    JournalEntry,
    MilestoneProjection,
    StreakResult,
)

MILESTONES: tuple[int, ...] = (5, 10, 25, 50, 100, 200, 365, 500, 1000)

EntryLike = JournalEntry | Mapping[str, object]


def entry_timestamp(entry: EntryLike) -> object:
    """Return the creation timestamp of an entry or raw store document."""
    if isinstance(entry, JournalEntry):
        return entry.created_at
    if "createdAt" in entry:
        return entry["createdAt"]
    if "created_at" in entry:
        return entry["created_at"]
    raise ValueError("Entry has no createdAt")


def unique_days(
    entries: Iterable[EntryLike] | None, tzinfo: tzinfo = UTC
) -> list[date]:
    """Unique entry days sorted newest first."""
    if not entries:
        return []
    days = {to_day(entry_timestamp(entry), tzinfo) for entry in entries}
    return sorted(days, reverse=True)


def calculate_current_streak(days: Sequence[date], *, today: date) -> CurrentStreak:
    """Count consecutive days ending today, or yesterday if today is empty.

    Args:
        days: Unique entry days, newest first.
        today: Reference calendar day.

    Returns:
        Streak length and its days in ascending order.
    """
    if not days:
        return CurrentStreak(streak=0)

    day_set = set(days)
    start = today if today in day_set else add_days(today, -1)

    matched: list[date] = []
    # A streak can never be longer than the number of distinct days.
    for offset in range(len(days)):
        candidate = add_days(start, -offset)
        if candidate not in day_set:
            break
        matched.append(candidate)

    matched.reverse()
    return CurrentStreak(streak=len(matched), dates=tuple(matched))


def find_longest_streak(days: Sequence[date]) -> int:
    """Longest run of consecutive days anywhere in ``days`` (newest first)."""
    if not days:
        return 0

    longest = run = 1
    for later, earlier in zip(days, days[1:]):
        if days_between(later, earlier) == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def calculate_streaks(
    entries: Iterable[EntryLike] | None,
    *,
    today: date,
    tzinfo: tzinfo = UTC,
) -> StreakResult:
    """Compute streak statistics for one user's entries.

    Args:
        entries: Entries of a single user, in any order.
        today: Reference calendar day.
        tzinfo: Frame used to truncate timestamps to days.

    Returns:
        A new ``StreakResult``; the zero result for empty input.
    """
    days = unique_days(entries, tzinfo)
    if not days:
        return StreakResult()

    current = calculate_current_streak(days, today=today)
    return StreakResult(
        current_streak=current.streak,
        longest_streak=find_longest_streak(days),
        last_entry_date=days[0],
        streak_dates=current.dates,
    )


def is_streak_active(
    entries: Iterable[EntryLike] | None,
    *,
    today: date,
    tzinfo: tzinfo = UTC,
) -> bool:
    """True if the most recent entry was written today or yesterday."""
    if not entries:
        return False
    latest = max(
        (to_day(entry_timestamp(entry), tzinfo) for entry in entries), default=None
    )
    return latest is not None and latest in (today, add_days(today, -1))


def next_milestone(
    current_streak: int, milestones: Sequence[int] = MILESTONES
) -> MilestoneProjection:
    """Project the first milestone strictly above ``current_streak``.

    Past the last milestone the target is the next hundred above the streak.

    Raises:
        ValueError: If ``current_streak`` is negative.
    """
    if current_streak < 0:
        raise ValueError(f"Streak must be >= 0, got {current_streak}")

    target = next((m for m in milestones if current_streak < m), None)
    if target is None:
        target = (current_streak // 100 + 1) * 100
    return MilestoneProjection(days_until=target - current_streak, milestone=target)


def streak_status_message(result: StreakResult, *, today: date) -> str:
    """Short motivational text for the streak widget."""
    if result.current_streak == 0:
        return "Start your journaling streak today! ✨"

    wrote_today = result.last_entry_date == today
    if result.current_streak == 1:
        if wrote_today:
            return "Great start! Keep it going tomorrow! 🔥"
        return "1 day streak - write today to continue! 💪"
    if wrote_today:
        return f"Amazing! {result.current_streak} day streak! 🔥"
    return f"{result.current_streak} day streak - write today to continue! 🔥"

"""Modelos tipados para entradas de diario y estadísticas de racha."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

MOODS: tuple[str, ...] = ("very-sad", "sad", "neutral", "happy", "very-happy")


@dataclass(frozen=True)
class JournalEntry:
    """One journal entry (only ``created_at`` feeds streak math)."""

    entry_id: str
    created_at: datetime
    user_id: str | None = None
    title: str | None = None
    mood: str | None = None
    category_id: str | None = None


@dataclass(frozen=True)
class CurrentStreak:
    """Length of the current streak and its days, oldest first."""

    streak: int
    dates: tuple[date, ...] = ()


@dataclass(frozen=True)
class StreakResult:
    """Streak statistics for one user."""

    current_streak: int = 0
    longest_streak: int = 0
    last_entry_date: date | None = None
    streak_dates: tuple[date, ...] = ()

    def as_dict(self) -> dict[str, object]:
        """Return the camelCase shape consumed by the app."""
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastEntryDate": (
                self.last_entry_date.isoformat() if self.last_entry_date else None
            ),
            "streakDates": [d.isoformat() for d in self.streak_dates],
        }


@dataclass(frozen=True)
class MilestoneProjection:
    """Next milestone and the days missing to reach it."""

    days_until: int
    milestone: int

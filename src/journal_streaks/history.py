"""Historial diario de entradas (calendario + resumen por día + rachas)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, tzinfo

import pandas as pd

from journal_streaks.days import UTC, add_days, parse_timestamp, to_day
from journal_streaks.model import JournalEntry, StreakResult
from journal_streaks.streaks import EntryLike, entry_timestamp

FRAME_COLUMNS = ["id", "created_at", "date", "mood", "title"]
SUMMARY_COLUMNS = ["date", "entries", "mood"]
CALENDAR_COLUMNS = ["date", "entries", "mood", "run_length", "in_current_streak"]


def _entry_field(entry: EntryLike, attr: str, key: str) -> object:
    if isinstance(entry, JournalEntry):
        return getattr(entry, attr)
    return entry.get(key)


def entries_to_frame(
    entries: Iterable[EntryLike] | None, tzinfo: tzinfo = UTC
) -> pd.DataFrame:
    """Convert entries to a DataFrame with their calendar day."""
    rows = [
        {
            "id": _entry_field(entry, "entry_id", "_id"),
            "created_at": parse_timestamp(entry_timestamp(entry)),
            "date": to_day(entry_timestamp(entry), tzinfo),
            "mood": _entry_field(entry, "mood", "mood"),
            "title": _entry_field(entry, "title", "title"),
        }
        for entry in entries or []
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    if df.empty:
        return df
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
    return df.sort_values("created_at").reset_index(drop=True)


def _dominant_mood(moods: pd.Series) -> object:
    """Ánimo más frecuente del día (empate: el primero registrado)."""
    counts = moods.dropna().value_counts(sort=False)
    if counts.empty:
        return pd.NA
    return counts.idxmax()


def daily_entry_summary(frame: pd.DataFrame) -> pd.DataFrame:
    """Aggregate entries by day (count + dominant mood)."""
    if frame.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    g = frame.groupby("date", as_index=False).agg(
        entries=("id", "size"),
        mood=("mood", _dominant_mood),
    )
    return g.sort_values("date").reset_index(drop=True)


def build_calendar(min_day: date, max_day: date) -> pd.DataFrame:
    """Build inclusive day calendar DataFrame."""
    days = pd.date_range(start=min_day, end=max_day, freq="D")
    return pd.DataFrame({"date": days.date})


def streak_calendar(
    entries: Iterable[EntryLike] | None,
    result: StreakResult,
    *,
    today: date,
    tzinfo: tzinfo = UTC,
) -> pd.DataFrame:
    """One row per day from the first entry up to today.

    ``run_length`` is the length of the consecutive-day run ending on each
    row (0 on days without entries); ``in_current_streak`` marks the days of
    ``result.streak_dates``.
    """
    summary = daily_entry_summary(entries_to_frame(entries, tzinfo))
    if summary.empty:
        return pd.DataFrame(columns=CALENDAR_COLUMNS)

    first_day = min(summary["date"])
    last_day = max(max(summary["date"]), today)
    out = build_calendar(first_day, last_day).merge(summary, on="date", how="left")
    out["entries"] = out["entries"].fillna(0).astype(int)

    run_lengths: list[int] = []
    run = 0
    for count in out["entries"]:
        run = run + 1 if count > 0 else 0
        run_lengths.append(run)
    out["run_length"] = run_lengths

    streak_days = set(result.streak_dates)
    out["in_current_streak"] = out["date"].map(lambda d: d in streak_days)
    return out[CALENDAR_COLUMNS]


def entries_between(
    entries: Iterable[EntryLike] | None,
    start: date,
    end: date,
    tzinfo: tzinfo = UTC,
) -> list[EntryLike]:
    """Entries whose calendar day falls in ``[start, end]``."""
    if end < start:
        raise ValueError(f"Empty range: {start.isoformat()} > {end.isoformat()}")
    return [
        entry
        for entry in entries or []
        if start <= to_day(entry_timestamp(entry), tzinfo) <= end
    ]


def recent_window(today: date, days: int) -> tuple[date, date]:
    """Inclusive range covering the last ``days`` days up to ``today``."""
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    return add_days(today, -(days - 1)), today

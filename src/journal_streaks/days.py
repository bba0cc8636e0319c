"""Aritmética de días calendario en un marco de referencia fijo."""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

from dateutil import parser, tz

UTC = tz.UTC


def parse_timestamp(value: object) -> datetime:
    """Parse a stored timestamp into a ``datetime``.

    Accepts ``datetime`` objects (returned unchanged) and ISO 8601 strings
    such as ``2025-09-21T10:30:00Z`` or ``2025-09-21 10:30``.

    Raises:
        ValueError: If the string is not a valid timestamp.
        TypeError: If the value is neither a string nor a datetime.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty timestamp")
        try:
            return parser.isoparse(text)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")


def to_day(value: object, tzinfo: tzinfo = UTC) -> date:
    """Truncate a timestamp to its calendar day in ``tzinfo``.

    Naive datetimes are taken as already expressed in ``tzinfo``. Plain
    ``date`` values are returned unchanged, so ``to_day`` is idempotent.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    moment = parse_timestamp(value)
    if moment.tzinfo is not None:
        moment = moment.astimezone(tzinfo)
    return moment.date()


def add_days(day: date | str, days: int) -> date:
    """Shift a calendar day by ``days`` (signed)."""
    return to_day(day) + timedelta(days=days)


def days_between(later: date | str, earlier: date | str) -> int:
    """Signed count of calendar days from ``earlier`` to ``later``."""
    return (to_day(later) - to_day(earlier)).days


def current_day(tzinfo: tzinfo = UTC, now: datetime | None = None) -> date:
    """Return today's calendar day in ``tzinfo``."""
    moment = now if now is not None else datetime.now(tz=tzinfo)
    return to_day(moment, tzinfo)

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError

DateInput = Union[date, datetime, str]

ONE_DAY = timedelta(hours=24)


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {name!r}")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz: tzinfo) -> datetime:
    """Current wall-clock time in the reference timezone, as a naive datetime.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now(tz).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def day_window(day: date) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` interval covering one calendar day.

    A record at exactly ``start`` belongs to the day, one at ``end`` does not.
    """
    if isinstance(day, datetime):
        day = day.date()
    start = start_of_day(day)
    return start, start + ONE_DAY


def normalize_instant(value: DateInput, tz: tzinfo) -> datetime:
    """Coerce a date, datetime or ISO-8601 string into a reference-local instant.

    - ``date`` (or a ``YYYY-MM-DD`` string) -> start of that day
    - naive ``datetime`` -> taken as already reference-local
    - aware ``datetime`` (or a string with ``Z``/offset) -> converted to ``tz``

    The result is always naive, expressed as wall time in ``tz``.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Date value must not be empty")
        if len(text) == 10:
            try:
                return start_of_day(parse_iso_date(text))
            except ValueError:
                raise ValidationError(f"Invalid date: {value!r}")
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(tz).replace(tzinfo=None)
        return value

    if isinstance(value, date):
        return start_of_day(value)

    raise ValidationError(f"Unsupported date value: {value!r}")


def as_reference_date(value: DateInput, tz: tzinfo) -> date:
    """Calendar day (in the reference timezone) that ``value`` falls on."""
    return normalize_instant(value, tz).date()

"""Calendar helpers: seed strings, day numbering, and lenient date parsing."""

from __future__ import annotations

import datetime as dt
import re

_SEPARATORS = re.compile(r"[\s./]")
_DASH_RUNS = re.compile(r"-+")
_FULL_DATE = re.compile(r"^(\d{1,4})-(\d{1,2})-(\d{1,2})$")
_SHORT_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})$")


def build_seed(user_id: str, day: dt.date) -> str:
    """Return the seed string for *user_id* on *day* (``"<user>-YYYY-MM-DD"``)."""
    return f"{user_id}-{day.isoformat()}"


def day_of_year(day: dt.date) -> int:
    """1-based ordinal of *day* within its year."""
    return day.timetuple().tm_yday


def weekday_weight(day: dt.date) -> float:
    """Weight in ``(0, 1]`` that grows from Sunday (1/7) to Saturday (7/7)."""
    return (day.isoweekday() % 7 + 1) / 7


def month_day(day: dt.date) -> str:
    """Format *day* as ``MM-DD``."""
    return f"{day.month:02d}-{day.day:02d}"


def parse_date(text: str, default: dt.date) -> dt.date | None:
    """Parse a user-supplied date.

    Accepts ``YYYY-MM-DD``, ``YY-MM-DD`` and ``MM-DD`` with ``-``, ``.``,
    ``/`` or whitespace as separators. Two-digit years resolve to the
    century that keeps them within twenty years ahead of *default*.
    ``MM-DD`` takes its year from *default*.

    Parameters
    ----------
    text : str
        Raw date text.
    default : datetime.date
        Reference date supplying the year for short forms.

    Returns
    -------
    datetime.date | None
        ``None`` when *text* is empty, malformed, or not a real calendar day.
    """
    if not text or not text.strip():
        return None

    normalized = _DASH_RUNS.sub("-", _SEPARATORS.sub("-", text.strip()))

    full = _FULL_DATE.match(normalized)
    short = _SHORT_DATE.match(normalized)
    if full:
        year, month, day = (int(part) for part in full.groups())
        if year < 100:
            threshold = (default.year % 100 + 20) % 100
            year = 1900 + year if year > threshold else 2000 + year
    elif short:
        year = default.year
        month, day = (int(part) for part in short.groups())
    else:
        return None

    try:
        return dt.date(year, month, day)
    except ValueError:
        return None

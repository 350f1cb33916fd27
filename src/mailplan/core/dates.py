"""Pure date normalization and display helpers - no I/O dependencies."""

import re
from datetime import date, datetime, timedelta

from dateutil import parser as date_parser

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
KANJI_DATE_RE = re.compile(r"^(?:(\d{4})年)?\s*(\d{1,2})月\s*(\d{1,2})日$")
DISPLAY_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})$")

WEEKDAY_LABELS = ["月", "火", "水", "木", "金", "土", "日"]


def _is_valid_iso(value: str) -> bool:
    if not ISO_DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def normalize(raw: str | None, as_of: date | None = None) -> str:
    """
    Canonicalize a calendar date to YYYY-MM-DD.

    Canonical input is returned unchanged. Anything else is parsed, with a
    missing year taken from as_of. Input without both a month and a day,
    or that cannot be parsed, returns "".

    Pure function - no I/O.
    """
    if not raw:
        return ""
    value = raw.strip()
    if _is_valid_iso(value):
        return value

    as_of = as_of or date.today()

    match = KANJI_DATE_RE.match(value)
    if match:
        year = int(match.group(1)) if match.group(1) else as_of.year
        try:
            return date(year, int(match.group(2)), int(match.group(3))).isoformat()
        except ValueError:
            return ""

    # dateutil fills missing fields from the default; parsing against two
    # defaults exposes input that never named a month and day ("3 PM", "10")
    try:
        first = date_parser.parse(value, default=datetime(as_of.year, 1, 1), ignoretz=True)
        second = date_parser.parse(value, default=datetime(as_of.year, 2, 2), ignoretz=True)
    except (ValueError, OverflowError):
        return ""
    if (first.month, first.day) != (second.month, second.day):
        return ""
    return first.date().isoformat()


def format_for_display(canonical: str) -> str:
    """Format YYYY-MM-DD as M/D (no leading zeros, no year)."""
    try:
        d = date.fromisoformat(canonical)
    except (TypeError, ValueError):
        return ""
    return f"{d.month}/{d.day}"


def parse_from_display(display: str, as_of: date | None = None) -> str | None:
    """Convert M/D back to YYYY-MM-DD in the current year. None if malformed."""
    match = DISPLAY_DATE_RE.match((display or "").strip())
    if not match:
        return None
    year = (as_of or date.today()).year
    try:
        return date(year, int(match.group(1)), int(match.group(2))).isoformat()
    except ValueError:
        return None


def is_workday(d: date) -> bool:
    """Monday through Friday."""
    return d.weekday() < 5


def next_workday(d: date) -> date:
    """Return d if it is a workday, otherwise the following Monday."""
    while not is_workday(d):
        d += timedelta(days=1)
    return d


def weekday_label(d: date) -> str:
    return WEEKDAY_LABELS[d.weekday()]

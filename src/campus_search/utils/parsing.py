"""Lenient value parsing for document metadata.

Metadata arrives from the placement API as loosely formatted strings. The
helpers here never raise: a value that cannot be understood is reported as
missing (dates) or zero (salaries) so ranking and filtering keep working.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
import re


_EXTRA_DATE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_SALARY_PATTERN = re.compile(r"\d[\d,]*")


def parse_date(value: object) -> datetime | None:
    """Parse a metadata date into an aware UTC datetime.

    Accepts ``datetime``/``date`` objects, ISO-8601 strings (``2024-01-15``,
    ``2024-01-15T10:30:00Z``) and a handful of human formats. Naive values
    are interpreted as UTC.

    Returns:
        The parsed datetime, or None when the value is empty or unparseable.

    Examples:
        >>> parse_date("2024-01-15").isoformat()
        '2024-01-15T00:00:00+00:00'
        >>> parse_date("not a date") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = _parse_date_text(text)
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # Offsets that push a boundary date past year 1 or 9999
        return None


def _parse_date_text(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except (ValueError, OverflowError):
        pass
    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except (ValueError, OverflowError):
            continue
    return None


def parse_salary(value: str | None) -> int:
    """Extract the leading numeric run of a salary string.

    Thousands separators are stripped: ``"$120,000 - $180,000"`` -> 120000.
    Strings without digits yield 0.
    """
    if not value:
        return 0
    match = _SALARY_PATTERN.search(value)
    if not match:
        return 0
    return int(match.group(0).replace(",", ""))

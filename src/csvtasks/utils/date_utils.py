"""Due date normalization for CSV rows and remote task records.

Every due value that enters the matching logic is reduced to a canonical UTC
instant of the form ``YYYY-MM-DDTHH:MM:SS.mmmZ``. Bare calendar dates are
pinned to UTC midnight so date-only comparisons give the same answer
regardless of the local timezone of the machine running the pipeline.
"""

import re
from datetime import UTC, date, datetime

from dateutil import parser as date_parser

BARE_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Fill-in dates that differ in year, month and day
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def is_bare_date(raw: str | None) -> bool:
    """Check whether a value is exactly ``YYYY-MM-DD``."""
    return bool(raw) and BARE_DATE_PATTERN.fullmatch(raw) is not None


def to_canonical(moment: datetime) -> str:
    """Format a datetime as a canonical UTC instant.

    Naive datetimes are taken to be UTC already.

    Args:
        moment: Datetime to format

    Returns:
        str: Instant such as ``2024-01-01T00:00:00.000Z``
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )


def _parse_instant(raw: str) -> datetime | None:
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass

    # dateutil fills missing fields from a default date. A value that parses
    # differently against two defaults is partial and has no fixed instant.
    try:
        first, second = (
            date_parser.parse(raw, default=default) for default in _FILL_DEFAULTS
        )
    except (ValueError, OverflowError):
        return None

    if first != second:
        return None
    return first


def normalize_due(raw: str | None) -> str | None:
    """Convert a date-only or timestamp string to a canonical UTC instant.

    Args:
        raw: ``YYYY-MM-DD``, an RFC 3339 timestamp or any other complete
            date understood by ``dateutil``. Partial values such as ``May``
            or ``10:00`` are rejected.

    Returns:
        Optional[str]: Canonical instant, or None if empty or unparsable
    """
    if raw is None:
        return None

    raw = raw.strip()
    if not raw:
        return None

    if is_bare_date(raw):
        try:
            day = date.fromisoformat(raw)
        except ValueError:
            return None
        return to_canonical(datetime(day.year, day.month, day.day, tzinfo=UTC))

    parsed = _parse_instant(raw)
    if parsed is None:
        return None

    try:
        return to_canonical(parsed)
    except (ValueError, OverflowError):
        # Offsets can push an instant outside the representable range
        return None


def date_only(instant: str | None) -> str | None:
    """Extract the UTC calendar date of an instant.

    Args:
        instant: Canonical instant (any RFC 3339 timestamp is accepted)

    Returns:
        Optional[str]: ``YYYY-MM-DD``, or None if empty or unparsable
    """
    if not instant:
        return None

    try:
        parsed = datetime.fromisoformat(instant.strip().replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)

    try:
        return parsed.astimezone(UTC).date().isoformat()
    except (ValueError, OverflowError):
        return None

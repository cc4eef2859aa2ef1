"""Date helpers for the Cineplex API formats."""

from datetime import date, datetime


def format_showtime_date(value: date) -> str:
    """
    Format a date the way the showtimes endpoint expects (M/D/YYYY, no padding).

    Example:
        >>> format_showtime_date(date(2026, 2, 1))
        '2/1/2026'
    """
    return f"{value.month}/{value.day}/{value.year}"


def parse_showtime_date(value: str) -> date:
    """
    Parse an M/D/YYYY string.

    Raises:
        ValueError: If the string is not a valid M/D/YYYY date
    """
    parts = value.strip().split("/")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected M/D/YYYY, got {value!r}")
    month, day, year = (int(p) for p in parts)
    return date(year, month, day)


def parse_start_time(value: str | None) -> datetime | None:
    """Parse a showStartDateTime value; None if missing or malformed."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

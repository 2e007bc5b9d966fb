"""Shared date and time utilities used across the project."""

from datetime import date, datetime

# Standard day-of-week names in order (Monday = 0, Sunday = 6)
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Japanese single-character weekday labels, same order as DAY_NAMES
JP_DAY_NAMES = ["月", "火", "水", "木", "金", "土", "日"]

# Mapping from day abbreviation to weekday number (0-6)
DAY_TO_WEEKDAY = {name: i for i, name in enumerate(DAY_NAMES)}

SATURDAY = DAY_TO_WEEKDAY["Sat"]
SUNDAY = DAY_TO_WEEKDAY["Sun"]

ISO_DATE_FORMAT = "%Y-%m-%d"


def is_weekend(day: date) -> bool:
    """Return True for Saturdays and Sundays."""
    return day.weekday() in (SATURDAY, SUNDAY)


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string as a plain local calendar date.

    The string is never interpreted as a UTC midnight, so the day cannot
    shift when the local timezone is behind UTC.

    Args:
        value: Date string in YYYY-MM-DD form

    Returns:
        date object

    Raises:
        ValueError: If value is not a valid YYYY-MM-DD date
    """
    return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()


def format_iso_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.strftime(ISO_DATE_FORMAT)


def jp_weekday(day: date) -> str:
    """Japanese weekday label for a date (e.g. "水")."""
    return JP_DAY_NAMES[day.weekday()]


def format_jp_date(day: date) -> str:
    """Format a date for the dashboard header, e.g. 2025年1月1日（水）."""
    return f"{day.year}年{day.month}月{day.day}日（{jp_weekday(day)}）"


def format_month_day(day: date) -> str:
    """Short M/D（曜） label used by the delivery calculator."""
    return f"{day.month}/{day.day}（{jp_weekday(day)}）"


def format_hours_minutes(seconds: int) -> str:
    """Format a duration in seconds as H:MM (seconds are truncated)."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}:{minutes:02d}"


def format_clock(moment: datetime) -> str:
    """Digital clock label HH:MM:SS."""
    return moment.strftime("%H:%M:%S")

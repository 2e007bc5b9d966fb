"""Holiday lookup table and its loaders."""

import json
import logging
from collections.abc import Iterator, Mapping
from datetime import date
from pathlib import Path
from types import MappingProxyType

import requests

from workdesk import config
from workdesk.date_utils import format_iso_date, parse_iso_date

logger = logging.getLogger(__name__)


# Custom exceptions for holiday data errors
class HolidayError(Exception):
    """Base exception for holiday table errors."""


class HolidayDataError(HolidayError):
    """Malformed holiday data (bad key, empty name, wrong JSON shape)."""


class HolidayFetchError(HolidayError):
    """Holiday feed could not be fetched."""


class HolidayTable:
    """
    Read-only mapping from calendar date to holiday name.

    Months are 1-based in every lookup. A date without an entry is simply
    not a holiday.
    """

    def __init__(self, entries: Mapping[date, str] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, str]) -> "HolidayTable":
        """
        Build a table from {"YYYY-MM-DD": name} data.

        Raises:
            HolidayDataError: If a key is not a valid date or a name is empty
        """
        entries = {}
        for key, name in raw.items():
            try:
                day = parse_iso_date(key)
            except (TypeError, ValueError, AttributeError) as e:
                raise HolidayDataError(f"Invalid holiday date key: {key!r}") from e
            if not isinstance(name, str) or not name.strip():
                raise HolidayDataError(f"Missing holiday name for {key}")
            entries[day] = name.strip()
        return cls(entries)

    def name_for(self, day: date) -> str | None:
        return self._entries.get(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._entries

    def has(self, year: int, month: int, day: int) -> str | None:
        """Holiday name for year/month/day (1-based month), or None."""
        try:
            return self._entries.get(date(year, month, day))
        except ValueError:
            return None

    def between(self, start: date, end: date) -> list[tuple[date, str]]:
        """Holidays from start to end inclusive, in date order."""
        return [(day, self._entries[day]) for day in self if start <= day <= end]

    def to_mapping(self) -> dict[str, str]:
        return {format_iso_date(day): self._entries[day] for day in self}

    def __contains__(self, day: object) -> bool:
        return day in self._entries

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HolidayTable({len(self)} entries)"


def load_holiday_table(filepath: Path) -> HolidayTable:
    """
    Load a holiday table from a JSON object file.

    Args:
        filepath: Path to a {"YYYY-MM-DD": name} JSON file

    Returns:
        HolidayTable
    """
    if not filepath.exists():
        error_msg = f"File not found: {filepath}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(filepath, encoding="utf-8") as f:
            raw_data = json.load(f)
    except json.JSONDecodeError as e:
        raise HolidayDataError(f"Invalid JSON in {filepath}: {e}") from e

    if not isinstance(raw_data, dict):
        raise HolidayDataError(f"Expected a JSON object in {filepath}")

    table = HolidayTable.from_mapping(raw_data)
    logger.info("Loaded %d holidays from %s", len(table), filepath)
    return table


def load_default_holiday_table() -> HolidayTable:
    """Load the holiday file named by WORKDESK_HOLIDAYS_FILE, else the bundled one."""
    if config.HOLIDAYS_FILE:
        return load_holiday_table(Path(config.HOLIDAYS_FILE))
    return load_holiday_table(config.BUNDLED_HOLIDAYS_FILE)


def fetch_holiday_table(
    url: str = config.HOLIDAY_API_URL,
    timeout: int = config.REQUEST_TIMEOUT_SECONDS,
) -> HolidayTable:
    """
    Fetch a holiday table from a JSON feed with the same shape as the data file.

    Args:
        url: Feed URL returning {"YYYY-MM-DD": name}
        timeout: Request timeout in seconds

    Returns:
        HolidayTable
    """
    try:
        logger.info("Fetching holidays from %s", url)
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.Timeout as e:
        raise HolidayFetchError("Request timed out") from e
    except requests.RequestException as e:
        raise HolidayFetchError(f"Request failed: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise HolidayDataError(f"Failed to parse holiday feed: {e}") from e

    if not isinstance(data, dict):
        raise HolidayDataError("Holiday feed did not return a JSON object")

    table = HolidayTable.from_mapping(data)
    logger.info("Received %d holidays from feed", len(table))
    return table


def save_holiday_table(table: HolidayTable, filepath: Path):
    """Save a holiday table as a {"YYYY-MM-DD": name} JSON file."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(table.to_mapping(), f, indent=2, ensure_ascii=False)
    logger.info("Wrote %d holidays to %s", len(table), filepath)

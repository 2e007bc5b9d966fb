"""Data models for the hourglass, delivery calculator and work clock."""

import math
from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from workdesk.date_utils import format_month_day, jp_weekday


class DeliveryMode(str, Enum):
    """How lead-time days are counted."""

    CALENDAR = "calendar"  # every day counts
    BUSINESS = "business"  # weekends and holidays are skipped
    HOLIDAY_AWARE = "holiday"  # only holidays are skipped


DELIVERY_MODE_LABELS = {
    DeliveryMode.CALENDAR: "暦日",
    DeliveryMode.BUSINESS: "営業日",
    DeliveryMode.HOLIDAY_AWARE: "祝日除外",
}


@dataclass(frozen=True)
class SandState:
    """Normalized sand heights for the two hourglass chambers."""

    upper_height: float
    lower_height: float
    upper_volume: float
    lower_volume: float

    def __post_init__(self):
        if not math.isclose(self.upper_volume + self.lower_volume, 1.0):
            raise ValueError(
                f"Sand volumes must sum to 1, got "
                f"{self.upper_volume} + {self.lower_volume}"
            )

    def as_percentages(self) -> tuple[float, float]:
        """Heights as (upper, lower) percentages for rendering."""
        return (self.upper_height * 100, self.lower_height * 100)


@dataclass(frozen=True)
class DeliveryResult:
    """A computed delivery date and the inputs that produced it."""

    order_date: date
    lead_time: int
    mode: DeliveryMode
    delivery_date: date

    @property
    def weekday_label(self) -> str:
        return jp_weekday(self.delivery_date)

    @property
    def display_label(self) -> str:
        """Label shown next to the calculator, e.g. "→ 1/8（水）"."""
        return f"→ {format_month_day(self.delivery_date)}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "order_date": self.order_date.isoformat(),
            "lead_time": self.lead_time,
            "mode": self.mode.value,
            "delivery_date": self.delivery_date.isoformat(),
            "weekday": self.weekday_label,
        }


@dataclass(frozen=True)
class WorkTimeSettings:
    """Daily working window (start inclusive, end inclusive)."""

    start: time = time(8, 30)
    end: time = time(17, 30)

    @property
    def start_seconds(self) -> int:
        return self.start.hour * 3600 + self.start.minute * 60

    @property
    def end_seconds(self) -> int:
        return self.end.hour * 3600 + self.end.minute * 60

    @property
    def total_seconds(self) -> int:
        return self.end_seconds - self.start_seconds


@dataclass(frozen=True)
class WorkProgress:
    """Snapshot of the working day at a given moment."""

    elapsed_seconds: int
    remaining_seconds: int
    progress: float  # 0.0 - 1.0
    in_work_hours: bool

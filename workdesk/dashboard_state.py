"""Application state shared by the dashboard commands."""

import logging
from datetime import date, datetime, time
from pathlib import Path

from workdesk.delivery_calculator import compute_all_modes, compute_delivery
from workdesk.holidays import (
    HolidayTable,
    load_default_holiday_table,
    load_holiday_table,
)
from workdesk.models import (
    DeliveryMode,
    DeliveryResult,
    SandState,
    WorkProgress,
    WorkTimeSettings,
)
from workdesk.settings_store import load_work_time_settings, save_work_time_settings
from workdesk.work_clock import (
    compute_work_progress,
    create_work_time_settings,
    work_hourglass,
)

logger = logging.getLogger(__name__)


class DashboardState:
    """
    Owns the working-time settings and the holiday table.

    Every time-dependent method takes the current time as an argument.
    """

    def __init__(
        self,
        settings: WorkTimeSettings | None = None,
        holidays: HolidayTable | None = None,
        settings_path: Path | None = None,
    ):
        self.settings = settings or WorkTimeSettings()
        self.holidays = holidays if holidays is not None else HolidayTable()
        self.settings_path = settings_path

    @classmethod
    def load(
        cls, settings_path: Path, holidays_path: Path | None = None
    ) -> "DashboardState":
        """Load saved settings and a holiday table (bundled one by default)."""
        if holidays_path is not None:
            holidays = load_holiday_table(holidays_path)
        else:
            holidays = load_default_holiday_table()
        return cls(
            settings=load_work_time_settings(settings_path),
            holidays=holidays,
            settings_path=settings_path,
        )

    def update_work_time(self, start: time | str, end: time | str) -> WorkTimeSettings:
        """Validate and apply a new working window, saving it when a path is set."""
        self.settings = create_work_time_settings(start, end)
        logger.info(
            "Work time updated to %s-%s",
            self.settings.start.strftime("%H:%M"),
            self.settings.end.strftime("%H:%M"),
        )
        if self.settings_path is not None:
            save_work_time_settings(self.settings, self.settings_path)
        return self.settings

    def work_progress(self, now: datetime) -> WorkProgress:
        return compute_work_progress(now, self.settings)

    def hourglass(self, now: datetime) -> SandState:
        return work_hourglass(now, self.settings)

    def delivery(
        self,
        order_date: date,
        lead_time: int,
        mode: DeliveryMode | str = DeliveryMode.BUSINESS,
    ) -> DeliveryResult:
        return compute_delivery(order_date, lead_time, mode, self.holidays)

    def delivery_all_modes(self, order_date: date, lead_time: int) -> list[DeliveryResult]:
        return compute_all_modes(order_date, lead_time, self.holidays)

    def holiday_name(self, day: date) -> str | None:
        return self.holidays.name_for(day)

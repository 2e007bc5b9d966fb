"""Working-day clock: settings validation and progress through the day."""

from datetime import datetime, time

from workdesk.models import SandState, WorkProgress, WorkTimeSettings
from workdesk.sand_physics import compute_heights


class WorkTimeSettingsError(ValueError):
    """Invalid working window."""


def parse_work_time(value: str) -> time:
    """
    Parse an HH:MM string.

    Raises:
        WorkTimeSettingsError: If value is empty or not a valid HH:MM time
    """
    if not value or not value.strip():
        raise WorkTimeSettingsError("Start and end times are required")
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError as e:
        raise WorkTimeSettingsError(f"Invalid time: {value!r}") from e


def create_work_time_settings(start: time | str, end: time | str) -> WorkTimeSettings:
    """
    Build validated settings; the end must be strictly after the start.

    Seconds are dropped, the window is kept to the minute.
    """
    if isinstance(start, str):
        start = parse_work_time(start)
    if isinstance(end, str):
        end = parse_work_time(end)

    start = start.replace(second=0, microsecond=0)
    end = end.replace(second=0, microsecond=0)
    if start >= end:
        raise WorkTimeSettingsError("End time must be after start time")

    return WorkTimeSettings(start=start, end=end)


def compute_work_progress(now: datetime, settings: WorkTimeSettings) -> WorkProgress:
    """
    Elapsed and remaining working time at a given moment.

    Args:
        now: Current local wall-clock time
        settings: Working window

    Returns:
        WorkProgress; progress is 0 before the start and 1 after the end
    """
    current = now.hour * 3600 + now.minute * 60 + now.second
    total = settings.total_seconds

    if current < settings.start_seconds:
        return WorkProgress(
            elapsed_seconds=0,
            remaining_seconds=total,
            progress=0.0,
            in_work_hours=False,
        )
    if current > settings.end_seconds:
        return WorkProgress(
            elapsed_seconds=total,
            remaining_seconds=0,
            progress=1.0,
            in_work_hours=False,
        )

    elapsed = current - settings.start_seconds
    return WorkProgress(
        elapsed_seconds=elapsed,
        remaining_seconds=settings.end_seconds - current,
        progress=elapsed / total,
        in_work_hours=True,
    )


def work_hourglass(now: datetime, settings: WorkTimeSettings) -> SandState:
    """Sand heights of the work-day hourglass at a given moment."""
    return compute_heights(compute_work_progress(now, settings).progress)

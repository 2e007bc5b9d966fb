"""Persist the working-time settings as JSON."""

import json
import logging
from datetime import time
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from workdesk.models import WorkTimeSettings
from workdesk.work_clock import WorkTimeSettingsError, create_work_time_settings

logger = logging.getLogger(__name__)


class StoredWorkTime(BaseModel):
    """On-disk shape, keyed the same way the browser dashboard stored it."""

    startHour: int = Field(ge=0, le=23)
    startMinute: int = Field(ge=0, le=59)
    endHour: int = Field(ge=0, le=23)
    endMinute: int = Field(ge=0, le=59)

    @classmethod
    def from_settings(cls, settings: WorkTimeSettings) -> "StoredWorkTime":
        return cls(
            startHour=settings.start.hour,
            startMinute=settings.start.minute,
            endHour=settings.end.hour,
            endMinute=settings.end.minute,
        )

    def to_settings(self) -> WorkTimeSettings:
        return create_work_time_settings(
            time(self.startHour, self.startMinute),
            time(self.endHour, self.endMinute),
        )


def load_work_time_settings(filepath: Path) -> WorkTimeSettings:
    """
    Load saved settings, falling back to the defaults.

    A missing file is normal on first run. An unreadable or invalid file is
    logged and ignored.
    """
    if not filepath.exists():
        return WorkTimeSettings()

    try:
        with open(filepath, encoding="utf-8") as f:
            stored = StoredWorkTime.model_validate(json.load(f))
        return stored.to_settings()
    except (OSError, json.JSONDecodeError, ValidationError, WorkTimeSettingsError) as e:
        logger.warning("Could not load work time settings from %s: %s", filepath, e)
        return WorkTimeSettings()


def save_work_time_settings(settings: WorkTimeSettings, filepath: Path):
    """Save settings to a JSON file."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    stored = StoredWorkTime.from_settings(settings)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(stored.model_dump(), f, indent=2)
    logger.info("Saved work time settings to %s", filepath)

"""Runtime configuration read from the environment."""

import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_HOLIDAYS_FILE = PACKAGE_DIR / "data" / "holidays_jp.json"

# Constants
HOLIDAYS_FILE = os.getenv("WORKDESK_HOLIDAYS_FILE")
SETTINGS_FILE = Path(
    os.getenv("WORKDESK_SETTINGS_FILE", "output/work_time_settings.json")
)
LOG_FILE = os.getenv("WORKDESK_LOG_FILE", "workdesk.log")
HOLIDAY_API_URL = os.getenv(
    "WORKDESK_HOLIDAY_API_URL", "https://holidays-jp.github.io/api/v1/date.json"
)
REQUEST_TIMEOUT_SECONDS = 30

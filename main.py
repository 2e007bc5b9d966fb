"""CLI entry point for the workdesk dashboard tools."""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from workdesk import config
from workdesk.dashboard_state import DashboardState
from workdesk.date_utils import (
    format_clock,
    format_hours_minutes,
    format_iso_date,
    format_jp_date,
    parse_iso_date,
)
from workdesk.delivery_calculator import (
    MODE_ALIASES,
    InvalidDeliveryModeError,
    InvalidLeadTimeError,
)
from workdesk.holidays import HolidayError, fetch_holiday_table, save_holiday_table
from workdesk.models import DELIVERY_MODE_LABELS, DeliveryMode
from workdesk.sand_physics import InvalidProgressError, compute_heights, is_sand_falling
from workdesk.work_clock import WorkTimeSettingsError

logger = logging.getLogger(__name__)


def _date_arg(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected YYYY-MM-DD"
        ) from e


def _datetime_arg(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"invalid time {value!r}, expected YYYY-MM-DDTHH:MM"
        ) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Work dashboard utilities")
    parser.add_argument(
        "--settings",
        type=Path,
        default=config.SETTINGS_FILE,
        help="Work time settings file",
    )
    parser.add_argument("--holidays", type=Path, help="Holiday JSON file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    delivery = subparsers.add_parser("delivery", help="Calculate delivery dates")
    delivery.add_argument("order_date", type=_date_arg, help="Order date (YYYY-MM-DD)")
    delivery.add_argument("lead_time", type=int, help="Lead time in days")
    delivery.add_argument(
        "--mode",
        choices=[mode.value for mode in DeliveryMode] + list(MODE_ALIASES),
        help="Only this mode (default: all three)",
    )
    delivery.add_argument("--json", action="store_true", help="Print JSON")

    hourglass = subparsers.add_parser("hourglass", help="Sand heights for a progress")
    hourglass.add_argument("progress", type=float, help="Progress ratio (0-1)")

    workday = subparsers.add_parser("workday", help="Progress through the work day")
    workday.add_argument(
        "--now", type=_datetime_arg, help="Override current time (YYYY-MM-DDTHH:MM)"
    )

    settings = subparsers.add_parser("settings", help="Update work time settings")
    settings.add_argument("start", help="Start time (HH:MM)")
    settings.add_argument("end", help="End time (HH:MM)")

    holidays = subparsers.add_parser("holidays", help="List or refresh holidays")
    holidays.add_argument("--refresh", type=Path, help="Fetch feed and save here")
    holidays.add_argument(
        "--from", dest="start", type=_date_arg, help="First date (YYYY-MM-DD)"
    )
    holidays.add_argument("--to", dest="end", type=_date_arg, help="Last date (YYYY-MM-DD)")

    return parser


def run_delivery(state: DashboardState, args: argparse.Namespace):
    if args.mode:
        results = [state.delivery(args.order_date, args.lead_time, args.mode)]
    else:
        results = state.delivery_all_modes(args.order_date, args.lead_time)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        return

    for result in results:
        print(f"{DELIVERY_MODE_LABELS[result.mode]}: {result.display_label}")


def run_hourglass(args: argparse.Namespace):
    state = compute_heights(args.progress)
    upper, lower = state.as_percentages()
    print(f"upper: {upper:.1f}%  lower: {lower:.1f}%")
    print(f"falling: {'yes' if is_sand_falling(state) else 'no'}")


def run_workday(state: DashboardState, args: argparse.Namespace):
    now = args.now or datetime.now()
    progress = state.work_progress(now)
    sand = state.hourglass(now)
    upper, lower = sand.as_percentages()

    print(f"{format_jp_date(now.date())} {format_clock(now)}")
    holiday = state.holiday_name(now.date())
    if holiday:
        print(f"祝日: {holiday}")
    print(f"経過: {format_hours_minutes(progress.elapsed_seconds)}")
    print(f"残り: {format_hours_minutes(progress.remaining_seconds)}")
    print(f"進捗: {progress.progress * 100:.1f}%")
    print(f"砂時計: upper {upper:.1f}% / lower {lower:.1f}%")
    if not progress.in_work_hours:
        print("(勤務時間外)")


def run_settings(state: DashboardState, args: argparse.Namespace):
    settings = state.update_work_time(args.start, args.end)
    print(
        f"勤務時間: {settings.start.strftime('%H:%M')} - {settings.end.strftime('%H:%M')}"
    )


def run_holidays(state: DashboardState, args: argparse.Namespace):
    table = state.holidays
    if args.refresh:
        table = fetch_holiday_table()
        save_holiday_table(table, args.refresh)

    start = args.start or date.min
    end = args.end or date.max
    for day, name in table.between(start, end):
        print(f"{format_iso_date(day)} {name}")


def main(argv: list[str] | None = None):
    """Main CLI function."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(config.LOG_FILE, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    args = build_parser().parse_args(argv)

    try:
        if args.command == "hourglass":
            run_hourglass(args)
            return

        state = DashboardState.load(args.settings, args.holidays)
        if args.command == "delivery":
            run_delivery(state, args)
        elif args.command == "workday":
            run_workday(state, args)
        elif args.command == "settings":
            run_settings(state, args)
        elif args.command == "holidays":
            run_holidays(state, args)
    except (InvalidLeadTimeError, InvalidDeliveryModeError, InvalidProgressError) as e:
        logger.error("Invalid input: %s", e)
        sys.exit(1)
    except WorkTimeSettingsError as e:
        logger.error("Settings error: %s", e)
        sys.exit(1)
    except HolidayError as e:
        logger.error("Holiday data error: %s", e)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()

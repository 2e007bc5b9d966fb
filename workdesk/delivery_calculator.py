"""Delivery date calculator (calendar, business-day and holiday-aware lead times)."""

import logging
from datetime import date, datetime, timedelta

from workdesk.date_utils import is_weekend
from workdesk.holidays import HolidayTable
from workdesk.models import DeliveryMode, DeliveryResult

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class InvalidLeadTimeError(ValueError):
    """Lead time is not a positive integer."""


class InvalidDeliveryModeError(ValueError):
    """Unknown counting mode."""


# Alternate spellings accepted for a mode
MODE_ALIASES = {
    "holiday-aware": DeliveryMode.HOLIDAY_AWARE,
    "holiday_aware": DeliveryMode.HOLIDAY_AWARE,
}


def _coerce_mode(mode: DeliveryMode | str) -> DeliveryMode:
    if isinstance(mode, str) and mode in MODE_ALIASES:
        return MODE_ALIASES[mode]
    try:
        return DeliveryMode(mode)
    except ValueError as e:
        raise InvalidDeliveryModeError(f"Unknown delivery mode: {mode!r}") from e


def _counts_toward_lead_time(
    day: date, mode: DeliveryMode, holidays: HolidayTable
) -> bool:
    if holidays.is_holiday(day):
        return False
    if mode is DeliveryMode.BUSINESS:
        return not is_weekend(day)
    return True


def compute_delivery(
    order_date: date,
    lead_time: int,
    mode: DeliveryMode | str,
    holidays: HolidayTable,
) -> DeliveryResult:
    """
    Advance an order date by a lead time under a counting mode.

    The order date itself never counts; counting starts the day after.

    Args:
        order_date: Local calendar date the order was placed
        lead_time: Number of counted days, at least 1
        mode: calendar, business or holiday-aware counting
        holidays: Holiday lookup; dates without an entry are ordinary days

    Returns:
        DeliveryResult for the computed date

    Raises:
        InvalidLeadTimeError: If lead_time is not an integer >= 1
        InvalidDeliveryModeError: If mode is not a known DeliveryMode
    """
    if isinstance(lead_time, bool) or not isinstance(lead_time, int) or lead_time < 1:
        raise InvalidLeadTimeError(
            f"Lead time must be a positive integer, got {lead_time!r}"
        )
    mode = _coerce_mode(mode)
    if isinstance(order_date, datetime):
        order_date = order_date.date()

    if mode is DeliveryMode.CALENDAR:
        delivery_date = order_date + timedelta(days=lead_time)
    else:
        delivery_date = order_date
        counted = 0
        while counted < lead_time:
            delivery_date += ONE_DAY
            if _counts_toward_lead_time(delivery_date, mode, holidays):
                counted += 1

    logger.debug(
        "Delivery %s + %d (%s) -> %s",
        order_date,
        lead_time,
        mode.value,
        delivery_date,
    )

    return DeliveryResult(
        order_date=order_date,
        lead_time=lead_time,
        mode=mode,
        delivery_date=delivery_date,
    )


def compute_all_modes(
    order_date: date, lead_time: int, holidays: HolidayTable
) -> list[DeliveryResult]:
    """Compute the delivery date once per mode, in DeliveryMode order."""
    return [
        compute_delivery(order_date, lead_time, mode, holidays)
        for mode in DeliveryMode
    ]

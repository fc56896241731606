from __future__ import annotations

import calendar
from datetime import date
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from sunday_prep.errors import InvalidArgument

SUNDAY = calendar.SUNDAY  # 6 in date.weekday()


def _check_int(name: str, value) -> int:
    # bool is an int subclass but never a valid month/year
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return value


def sundays_in_month(month: int, year: int) -> List[int]:
    """Return the day-of-month values that fall on a Sunday, in order.

    The day count comes from the calendar module, so February follows the
    leap-year rules. Month overflow is not normalised: callers roll December
    into January themselves.
    """
    month = _check_int("month", month)
    year = _check_int("year", year)
    if not 1 <= month <= 12:
        raise InvalidArgument(f"month must be in 1..12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidArgument(f"year must be in 1..9999, got {year}")

    days = calendar.monthrange(year, month)[1]
    sundays = []
    for day in range(1, days + 1):
        if date(year, month, day).weekday() == SUNDAY:
            sundays.append(day)
    return sundays


def month_name(month: int) -> str:
    month = _check_int("month", month)
    if not 1 <= month <= 12:
        raise InvalidArgument(f"month must be in 1..12, got {month}")
    return date(2000, month, 1).strftime("%B")


def upcoming_month(today: Optional[date] = None, lead_days: int = 7) -> Tuple[int, int]:
    """(month, year) of the date `lead_days` after today, i.e. next week's month."""
    today = today or date.today()
    future = today + relativedelta(days=lead_days)
    return future.month, future.year


def sunday_stamp(year: int, month: int, day: int) -> str:
    """File stem for a Sunday: YYYY-MM-DD."""
    return f"{year}-{month:02d}-{day:02d}"


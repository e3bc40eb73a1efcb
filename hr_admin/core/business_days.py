"""
Business-day arithmetic.

A business day is a date that is neither a Saturday, a Sunday nor a holiday
of the configured ``HolidayCalendar``.
"""

import logging
from datetime import MAXYEAR, date, timedelta
from typing import Optional, Set

from hr_admin.core.errors import InvalidInputError, InvalidRangeError, Result
from hr_admin.core.holiday_calendar import HolidayCalendar, default_calendar, is_weekend

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def _check_range(start: Optional[date], end: Optional[date]) -> Optional[Result]:
    if start is None or end is None:
        return Result.failure(InvalidInputError("Start date and end date are required"))
    if start > end:
        return Result.failure(InvalidRangeError(f"Start date {start} is after end date {end}"))
    return None


def calendar_days_between(start: Optional[date], end: Optional[date]) -> Result[int]:
    """Inclusive calendar-day count of [start, end]; weekends and holidays included."""
    failure = _check_range(start, end)
    if failure is not None:
        return failure
    return Result.success((end - start).days + 1)


class BusinessDayCalculator:

    def __init__(self, calendar: HolidayCalendar = default_calendar):
        self.calendar = calendar

    def is_holiday(self, day: date) -> bool:
        return self.calendar.is_holiday(day)

    def is_business_day(self, day: date) -> bool:
        return not is_weekend(day) and not self.calendar.is_holiday(day)

    def calendar_days_between(self, start: Optional[date], end: Optional[date]) -> Result[int]:
        return calendar_days_between(start, end)

    def business_days_between(self, start: Optional[date], end: Optional[date]) -> Result[int]:
        """Number of business days in [start, end], both ends inclusive."""
        failure = _check_range(start, end)
        if failure is not None:
            return failure

        holidays = self.calendar.business_day_holidays_for_range(start.year, end.year).unwrap()
        count = 0
        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            if not is_weekend(current) and current not in holidays:
                count += 1
        return Result.success(count)

    def end_date_for_business_days(self, start: Optional[date], days: int) -> Result[date]:
        """
        Date on which the ``days``-th business day counted from ``start`` falls.

        ``start`` counts as day 1 when it is itself a business day. Weekends
        and holidays consume no quota and are never returned. A walk that
        would run past ``date.max`` is an ``InvalidRangeError``.
        """
        if start is None:
            return Result.failure(InvalidInputError("Start date cannot be null"))
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            return Result.failure(InvalidInputError("Days requested must be greater than zero"))
        if days > (date.max - start).days + 1:
            return Result.failure(
                InvalidRangeError(f"{days} business days from {start} run past {date.max}")
            )

        # Two calendar days per requested business day covers weekends and holidays
        # for any realistic request; the walk extends the set if it ever runs past it.
        if days * 2 > (date.max - start).days:
            covered_until = MAXYEAR
        else:
            covered_until = (start + timedelta(days=days * 2)).year
        holidays: Set[date] = set(
            self.calendar.business_day_holidays_for_range(start.year, covered_until).unwrap()
        )

        counted = 0
        current = start
        while True:
            if current.year > covered_until:
                covered_until = current.year
                holidays.update(
                    self.calendar.business_day_holidays_for_range(covered_until, covered_until).unwrap()
                )
                logger.debug("Extended holiday coverage to %d", covered_until)

            if not is_weekend(current) and current not in holidays:
                counted += 1
                if counted == days:
                    return Result.success(current)
            if current == date.max:
                return Result.failure(
                    InvalidRangeError(f"{days} business days from {start} run past {date.max}")
                )
            current += ONE_DAY


default_calculator = BusinessDayCalculator()

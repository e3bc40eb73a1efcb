"""
Holiday Calendar

Computes the non-working holidays of a year: a fixed list of (month, day)
dates plus movable holidays defined as day offsets from Easter Sunday.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Dict, FrozenSet, Tuple

from hr_admin.core.errors import InvalidInputError, InvalidRangeError, Result

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True, order=True)
class Holiday:
    day: date
    name: str
    fixed: bool = True


@dataclass(frozen=True)
class HolidayRules:
    """Fixed (month, day, name) entries and (offset from Easter, name) entries."""

    fixed: Tuple[Tuple[int, int, str], ...]
    easter_offsets: Tuple[Tuple[int, str], ...]


BRAZIL_NATIONAL = HolidayRules(
    fixed=(
        (1, 1, "Confraternização Universal"),
        (4, 21, "Tiradentes"),
        (5, 1, "Dia do Trabalho"),
        (9, 7, "Independência do Brasil"),
        (10, 12, "Nossa Senhora Aparecida"),
        (11, 2, "Finados"),
        (11, 15, "Proclamação da República"),
        (12, 25, "Natal"),
    ),
    easter_offsets=(
        (-47, "Carnaval"),
        (-2, "Sexta-feira Santa"),
        (60, "Corpus Christi"),
    ),
)


def easter_sunday(year: int) -> date:
    """Easter Sunday of a Gregorian year (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def is_weekend(day: date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def compute_holidays(year: int, rules: HolidayRules = BRAZIL_NATIONAL) -> FrozenSet[Holiday]:
    """All holidays of ``year``. Uncached."""
    holidays = {Holiday(date(year, month, day), name, True) for month, day, name in rules.fixed}
    easter = easter_sunday(year)
    holidays.update(
        Holiday(easter + timedelta(days=offset), name, False)
        for offset, name in rules.easter_offsets
    )
    return frozenset(holidays)


class HolidayCalendar:
    """
    Holiday lookups for one set of rules.

    With ``cache=True`` the per-year holiday sets are memoized. The memo is
    guarded by a lock; two threads computing the same year at once simply
    store equal values.
    """

    def __init__(self, rules: HolidayRules = BRAZIL_NATIONAL, cache: bool = True):
        self.rules = rules
        self.cache = cache
        self._years: Dict[int, FrozenSet[Holiday]] = {}
        self._lock = threading.Lock()

    def holidays_for_year(self, year: int) -> FrozenSet[Holiday]:
        if not self.cache:
            return compute_holidays(year, self.rules)

        with self._lock:
            cached = self._years.get(year)
        if cached is not None:
            return cached

        holidays = compute_holidays(year, self.rules)
        with self._lock:
            self._years.setdefault(year, holidays)
        logger.debug("Cached %d holidays for %d", len(holidays), year)
        return holidays

    def holiday_dates_for_year(self, year: int) -> FrozenSet[date]:
        # a movable holiday landing on a fixed one collapses to a single date
        return frozenset(h.day for h in self.holidays_for_year(year))

    def is_holiday(self, day: date) -> bool:
        return day in self.holiday_dates_for_year(day.year)

    def business_day_holidays_for_range(self, start_year: int, end_year: int) -> Result[FrozenSet[date]]:
        """
        Holiday dates over the inclusive year range, without those that fall
        on a Saturday or Sunday (weekends are already non-working days).
        """
        for year in (start_year, end_year):
            if not MINYEAR <= year <= MAXYEAR:
                return Result.failure(
                    InvalidInputError(f"Year {year} is outside {MINYEAR}..{MAXYEAR}")
                )
        if end_year < start_year:
            return Result.failure(
                InvalidRangeError(f"End year {end_year} is before start year {start_year}")
            )

        dates = set()
        for year in range(start_year, end_year + 1):
            dates.update(d for d in self.holiday_dates_for_year(year) if not is_weekend(d))
        return Result.success(frozenset(dates))

    def clear(self) -> None:
        with self._lock:
            self._years.clear()


default_calendar = HolidayCalendar()

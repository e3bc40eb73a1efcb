import threading
from datetime import date

import pytest

from hr_admin.core.errors import InvalidInputError, InvalidRangeError
from hr_admin.core.holiday_calendar import (
    BRAZIL_NATIONAL,
    Holiday,
    HolidayCalendar,
    HolidayRules,
    compute_holidays,
    easter_sunday,
)


class TestEaster:
    """Test the Easter Sunday computus"""

    @pytest.mark.parametrize("year, expected", [
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2000, date(2000, 4, 23)),
        (2019, date(2019, 4, 21)),
        (1961, date(1961, 4, 2)),
        (2038, date(2038, 4, 25)),
    ])
    def test_known_dates(self, year, expected):
        assert easter_sunday(year) == expected

    def test_always_a_sunday(self):
        for year in range(1900, 2101):
            assert easter_sunday(year).weekday() == 6


class TestHolidaysForYear:
    """Test the per-year holiday set"""

    def test_fixed_and_movable_counts(self):
        calendar = HolidayCalendar()
        for year in range(2020, 2031):
            holidays = calendar.holidays_for_year(year)
            assert len(holidays) == len(BRAZIL_NATIONAL.fixed) + len(BRAZIL_NATIONAL.easter_offsets)
            assert sum(1 for h in holidays if h.fixed) == 8
            assert sum(1 for h in holidays if not h.fixed) == 3

    def test_movable_holidays_2025(self):
        holidays = HolidayCalendar().holidays_for_year(2025)
        movable = {h.day: h.name for h in holidays if not h.fixed}
        assert movable == {
            date(2025, 3, 4): "Carnaval",
            date(2025, 4, 18): "Sexta-feira Santa",
            date(2025, 6, 19): "Corpus Christi",
        }

    def test_coinciding_holidays_collapse_to_one_date(self):
        """Good Friday 2000 fell on Tiradentes (April 21)"""
        calendar = HolidayCalendar()
        assert len(calendar.holidays_for_year(2000)) == 11
        dates = calendar.holiday_dates_for_year(2000)
        assert len(dates) == 10
        assert date(2000, 4, 21) in dates

    def test_weekend_holidays_are_still_holidays(self):
        calendar = HolidayCalendar()
        assert calendar.is_holiday(date(2025, 11, 15))  # Saturday

    def test_is_holiday(self):
        calendar = HolidayCalendar()
        assert calendar.is_holiday(date(2025, 1, 1))
        assert calendar.is_holiday(date(2025, 12, 25))
        assert not calendar.is_holiday(date(2025, 11, 13))

    def test_custom_rules(self):
        rules = HolidayRules(fixed=((7, 4, "Independence Day"),), easter_offsets=((1, "Easter Monday"),))
        holidays = compute_holidays(2025, rules)
        assert holidays == frozenset({
            Holiday(date(2025, 7, 4), "Independence Day", True),
            Holiday(date(2025, 4, 21), "Easter Monday", False),
        })


class TestBusinessDayHolidays:
    """Test the weekday-only holiday range"""

    def test_weekend_holidays_are_filtered(self):
        result = HolidayCalendar().business_day_holidays_for_range(2025, 2025)
        assert result.ok
        assert result.value == frozenset({
            date(2025, 1, 1),
            date(2025, 3, 4),
            date(2025, 4, 18),
            date(2025, 4, 21),
            date(2025, 5, 1),
            date(2025, 6, 19),
            date(2025, 12, 25),
        })

    def test_range_spans_years(self):
        calendar = HolidayCalendar()
        both = calendar.business_day_holidays_for_range(2025, 2026).value
        assert both == (
            calendar.business_day_holidays_for_range(2025, 2025).value
            | calendar.business_day_holidays_for_range(2026, 2026).value
        )
        assert date(2026, 1, 1) in both

    def test_inverted_range(self):
        result = HolidayCalendar().business_day_holidays_for_range(2026, 2025)
        assert not result.ok
        assert isinstance(result.error, InvalidRangeError)


class TestCaching:
    """Test memoization of holiday sets"""

    def test_repeated_calls_are_equal(self):
        calendar = HolidayCalendar()
        assert calendar.holidays_for_year(2025) == calendar.holidays_for_year(2025)

    def test_cached_and_uncached_agree(self):
        cached = HolidayCalendar(cache=True)
        uncached = HolidayCalendar(cache=False)
        for year in (1999, 2025, 2100):
            assert cached.holidays_for_year(year) == uncached.holidays_for_year(year)

    def test_cache_returns_same_object(self):
        calendar = HolidayCalendar()
        assert calendar.holidays_for_year(2025) is calendar.holidays_for_year(2025)

    def test_concurrent_computation(self):
        calendar = HolidayCalendar()
        results = []

        def compute():
            results.append(calendar.holidays_for_year(2031))

        threads = [threading.Thread(target=compute) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r == results[0] for r in results)


class TestYearBounds:
    """Test years the date type cannot represent"""

    @pytest.mark.parametrize("start_year,end_year", [(2025, 10000), (0, 2025), (-5, -1)])
    def test_out_of_range_years(self, start_year, end_year):
        result = HolidayCalendar().business_day_holidays_for_range(start_year, end_year)
        assert isinstance(result.error, InvalidInputError)

    def test_last_year(self):
        dates = HolidayCalendar().business_day_holidays_for_range(9999, 9999).unwrap()
        assert all(d.year == 9999 for d in dates)

"""
Calendar Endpoints

Holidays and business-day arithmetic used by bookings and vacations.
"""

from fastapi import APIRouter, Depends, Path, Query
from typing import List
from datetime import MAXYEAR, MINYEAR, date

from hr_admin.api.dependencies import get_calculator
from hr_admin.core.business_days import BusinessDayCalculator
from hr_admin.core.config import settings
from hr_admin.core.holiday_calendar import is_weekend
from hr_admin.schemas import HolidayResponse, HolidayCheckResponse, BusinessDaysResponse, EndDateResponse

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/holidays/{year}", response_model=List[HolidayResponse])
def list_holidays(
    year: int = Path(..., ge=MINYEAR, le=MAXYEAR),
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """All holidays of a year, including those falling on a weekend."""
    holidays = sorted(calculator.calendar.holidays_for_year(year))
    return [
        {
            "date": h.day,
            "name": h.name,
            "fixed": h.fixed,
            "weekday": h.day.strftime("%A"),
        }
        for h in holidays
    ]


@router.get("/business-day-holidays", response_model=List[date])
def list_business_day_holidays(
    start_year: int = Query(..., ge=MINYEAR, le=MAXYEAR, description="First year of the range"),
    end_year: int = Query(..., ge=MINYEAR, le=MAXYEAR, description="Last year of the range (inclusive)"),
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Holiday dates over a year range that fall on a weekday."""
    dates = calculator.calendar.business_day_holidays_for_range(start_year, end_year).unwrap()
    return sorted(dates)


@router.get("/check/{check_date}", response_model=HolidayCheckResponse)
def check_date(
    check_date: date,
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Whether a date is a holiday and whether it is a business day."""
    names = sorted(
        h.name for h in calculator.calendar.holidays_for_year(check_date.year)
        if h.day == check_date
    )
    return {
        "date": check_date,
        "is_holiday": bool(names),
        "is_business_day": not is_weekend(check_date) and not names,
        "holiday_names": names,
    }


@router.get("/business-days", response_model=BusinessDaysResponse)
def count_business_days(
    start_date: date,
    end_date: date,
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Business days and calendar days in an inclusive period."""
    return {
        "start_date": start_date,
        "end_date": end_date,
        "business_days": calculator.business_days_between(start_date, end_date).unwrap(),
        "calendar_days": calculator.calendar_days_between(start_date, end_date).unwrap(),
    }


@router.get("/end-date", response_model=EndDateResponse)
def end_date_for_business_days(
    start_date: date,
    business_days: int = Query(..., le=settings.MAX_CALENDAR_BUSINESS_DAYS),
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Date on which the given number of business days starting at start_date is reached."""
    end_date = calculator.end_date_for_business_days(start_date, business_days).unwrap()
    return {
        "start_date": start_date,
        "business_days": business_days,
        "end_date": end_date,
    }

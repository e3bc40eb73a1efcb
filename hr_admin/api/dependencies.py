from typing import Callable, Iterable, Optional

from sqlalchemy.orm import Session

from hr_admin.core.business_days import BusinessDayCalculator
from hr_admin.core.config import settings
from hr_admin.core.holiday_calendar import HolidayCalendar
from hr_admin.models.employee import Employee

_calculator = BusinessDayCalculator(HolidayCalendar(cache=settings.HOLIDAY_CACHE_ENABLED))


def get_calculator() -> BusinessDayCalculator:
    return _calculator


def manager_lookup(db: Session) -> Callable[[str], Optional[str]]:
    """Read the current manager pointer of an employee, raising LookupError for unknown ids."""
    def lookup(employee_id: str) -> Optional[str]:
        row = db.query(Employee.manager_id).filter(Employee.id == employee_id).first()
        if row is None:
            raise LookupError(employee_id)
        return row[0]
    return lookup


def lock_employee(db: Session, employee_id: str) -> Optional[Employee]:
    """
    Load an employee row FOR UPDATE.

    Reservation writes for one employee serialise on this row lock, so a
    conflict check and the insert that follows it see the same data.
    """
    return db.query(Employee).filter(Employee.id == employee_id).with_for_update().first()


def lock_employees(db: Session, employee_ids: Iterable[Optional[str]]) -> None:
    """
    Lock several employee rows, always in id order.

    Two requests touching the same pair of employees (A reports to B while
    B reports to A) then wait on each other instead of deadlocking.
    """
    for employee_id in sorted({eid for eid in employee_ids if eid is not None}):
        lock_employee(db, employee_id)

# Import all models here for Alembic to detect them
from hr_admin.models.employee import Employee, EmployeeRole, EmploymentType
from hr_admin.models.booking import Booking, BookingStatus
from hr_admin.models.vacation import Vacation, VacationStatus

__all__ = [
    "Employee",
    "EmployeeRole",
    "EmploymentType",
    "Booking",
    "BookingStatus",
    "Vacation",
    "VacationStatus",
]

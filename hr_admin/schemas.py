from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from hr_admin.core.config import settings
from hr_admin.core.tax_ids import validate_fiscal_number, validate_niss
from hr_admin.models.employee import EmployeeRole, EmploymentType
from hr_admin.models.booking import BookingStatus
from hr_admin.models.vacation import VacationStatus


def _clean_social_number(v):
    if v is None or (isinstance(v, str) and v.strip() == ''):
        return None
    result = validate_niss(v)
    if not result.ok:
        raise ValueError(result.error.message)
    return result.value


def _clean_fiscal_number(model):
    number = model.fiscal_number
    country = model.fiscal_number_country
    if number is None and country is None:
        return model
    if not number or not country:
        raise ValueError('fiscal_number and fiscal_number_country must be given together')
    result = validate_fiscal_number(country, number)
    if not result.ok:
        raise ValueError(result.error.message)
    model.fiscal_number = result.value
    model.fiscal_number_country = country.upper()
    return model


# ============= Employee Schemas =============
class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    fiscal_number: Optional[str] = None
    fiscal_number_country: Optional[str] = Field(default=None, min_length=2, max_length=2)
    social_number: Optional[str] = None
    employment_type: EmploymentType = EmploymentType.PERMANENT
    employee_role: EmployeeRole = EmployeeRole.EMPLOYEE
    hire_date: date
    vacation_days_balance: int = Field(default=0, ge=0)


class EmployeeCreate(EmployeeBase):
    manager_id: Optional[str] = None

    @field_validator('social_number', mode='before')
    @classmethod
    def validate_social_number(cls, v):
        return _clean_social_number(v)

    @model_validator(mode='after')
    def validate_fiscal_number(self):
        return _clean_fiscal_number(self)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    surname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    fiscal_number: Optional[str] = None
    fiscal_number_country: Optional[str] = Field(default=None, min_length=2, max_length=2)
    social_number: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    employee_role: Optional[EmployeeRole] = None
    vacation_days_balance: Optional[int] = Field(default=None, ge=0)
    manager_id: Optional[str] = None

    @field_validator(
        'name', 'surname', 'email', 'employment_type', 'employee_role', 'vacation_days_balance',
        mode='before'
    )
    @classmethod
    def reject_null(cls, v, info):
        # Omit a field to leave it unchanged; null would clear a required column
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('social_number', mode='before')
    @classmethod
    def validate_social_number(cls, v):
        return _clean_social_number(v)

    @model_validator(mode='after')
    def validate_fiscal_number(self):
        return _clean_fiscal_number(self)


class EmployeeResponse(EmployeeBase):
    id: str
    manager_id: Optional[str]
    is_active: bool
    termination_date: Optional[date]
    vacation_days_used: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ManagerAssignment(BaseModel):
    manager_id: Optional[str] = None


# ============= Booking Schemas =============
class BookingBase(BaseModel):
    start_date: date
    days_reserved: int = Field(..., ge=1, le=settings.MAX_BOOKING_DAYS)  # Business days
    request_notes: Optional[str] = None


class BookingCreate(BookingBase):
    employee_id: str


class BookingUpdate(BookingBase):
    pass


class BookingResponse(BookingBase):
    id: str
    employee_id: str
    vacation_id: Optional[str]
    end_date: date
    status: BookingStatus
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LinkVacationRequest(BaseModel):
    vacation_id: str


# ============= Vacation Schemas =============
class VacationBase(BaseModel):
    start_date: date
    end_date: date
    request_notes: Optional[str] = None

    @field_validator('end_date')
    @classmethod
    def validate_dates(cls, v, info):
        start = info.data.get('start_date')
        if start is not None and v < start:
            raise ValueError('end_date must be greater than or equal to start_date')
        return v


class VacationCreate(VacationBase):
    employee_id: str


class VacationUpdate(VacationBase):
    pass


class VacationResponse(BaseModel):
    id: str
    employee_id: str
    start_date: date
    end_date: date
    days_requested: int
    status: VacationStatus
    is_active: bool
    request_notes: Optional[str]
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    rejection_reason: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApprovalRequest(BaseModel):
    approved_by: str = Field(..., min_length=1)


class RejectRequest(BaseModel):
    rejected_by: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)


# ============= Calendar Schemas =============
class HolidayResponse(BaseModel):
    date: date
    name: str
    fixed: bool
    weekday: str


class HolidayCheckResponse(BaseModel):
    date: date
    is_holiday: bool
    is_business_day: bool
    holiday_names: List[str] = []


class BusinessDaysResponse(BaseModel):
    start_date: date
    end_date: date
    business_days: int
    calendar_days: int


class EndDateResponse(BaseModel):
    start_date: date
    business_days: int
    end_date: date

from sqlalchemy import Column, String, Boolean, Date, DateTime, Integer, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
from hr_admin.db.session import Base


class EmploymentType(str, enum.Enum):
    PERMANENT = "PERMANENT"
    FIXED_TERM = "FIXED_TERM"
    TEMPORARY = "TEMPORARY"
    PART_TIME = "PART_TIME"
    FULL_TIME = "FULL_TIME"
    ZERO_HOURS = "ZERO_HOURS"
    FREELANCE = "FREELANCE"
    INTERNSHIP = "INTERNSHIP"
    APPRENTICESHIP = "APPRENTICESHIP"


class EmployeeRole(str, enum.Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    HR = "HR"
    ADMIN = "ADMIN"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    fiscal_number = Column(String(20), nullable=True)
    fiscal_number_country = Column(String(2), nullable=True)
    social_number = Column(String(20), unique=True, nullable=True)
    employment_type = Column(SQLEnum(EmploymentType), nullable=False, default=EmploymentType.PERMANENT)
    employee_role = Column(SQLEnum(EmployeeRole), nullable=False, default=EmployeeRole.EMPLOYEE)
    hire_date = Column(Date, nullable=False)
    termination_date = Column(Date, nullable=True)
    manager_id = Column(String(36), ForeignKey("employees.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    vacation_days_balance = Column(Integer, default=0, nullable=False)
    vacation_days_used = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    manager = relationship("Employee", remote_side=[id], back_populates="subordinates")
    subordinates = relationship("Employee", back_populates="manager")
    bookings = relationship("Booking", back_populates="employee")
    vacations = relationship("Vacation", back_populates="employee")

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.name} {self.surname})>"

"""
Booking Model

A booking blocks a period of an employee's agenda ahead of a vacation
request. Its end date is derived from the start date and the number of
business days reserved.
"""

from sqlalchemy import Column, String, Date, DateTime, Integer, Boolean, ForeignKey, Enum as SQLEnum, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from hr_admin.core.conflicts import DateInterval, ReservationRecord, ReservationStatus
from hr_admin.db.session import Base


class BookingStatus(str, enum.Enum):
    RESERVED = "RESERVED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    vacation_id = Column(String(36), ForeignKey("vacations.id"), nullable=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    days_reserved = Column(Integer, nullable=False)
    request_notes = Column(Text, nullable=True)
    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.RESERVED)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="bookings")

    def as_reservation(self) -> ReservationRecord:
        return ReservationRecord(
            record_id=self.id,
            owner_id=self.employee_id,
            interval=DateInterval(self.start_date, self.end_date),
            status=ReservationStatus(self.status.value),
            is_active=self.is_active,
        )

    def __repr__(self):
        return f"<Booking(employee={self.employee_id}, {self.start_date}..{self.end_date})>"

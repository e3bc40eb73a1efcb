from sqlalchemy import Column, String, Date, DateTime, Integer, Boolean, ForeignKey, Enum as SQLEnum, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from hr_admin.core.conflicts import DateInterval, ReservationRecord, ReservationStatus
from hr_admin.db.session import Base


class VacationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class Vacation(Base):
    __tablename__ = "vacations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    days_requested = Column(Integer, nullable=False)
    status = Column(SQLEnum(VacationStatus), nullable=False, default=VacationStatus.PENDING)
    is_active = Column(Boolean, default=True, nullable=False)
    request_notes = Column(Text, nullable=True)
    approved_by = Column(String(255), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="vacations")

    def as_reservation(self) -> ReservationRecord:
        return ReservationRecord(
            record_id=self.id,
            owner_id=self.employee_id,
            interval=DateInterval(self.start_date, self.end_date),
            status=ReservationStatus(self.status.value),
            is_active=self.is_active,
        )

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from hr_admin.api.dependencies import get_calculator
from hr_admin.api.endpoints.employees import get_employee_or_404
from hr_admin.core.business_days import BusinessDayCalculator
from hr_admin.core.conflicts import DateInterval, check_reservation
from hr_admin.db.session import get_db
from hr_admin.models.booking import Booking, BookingStatus
from hr_admin.models.vacation import Vacation
from hr_admin.schemas import BookingCreate, BookingUpdate, BookingResponse, LinkVacationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_or_404(db: Session, booking_id: str) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking not found: {booking_id}"
        )
    return booking


def reserve_period(
    db: Session,
    calculator: BusinessDayCalculator,
    employee_id: str,
    start_date: date,
    days_reserved: int,
    exclude_booking_id: Optional[str] = None,
) -> DateInterval:
    """End date for the requested business days, checked against the employee's other bookings."""
    end_date = calculator.end_date_for_business_days(start_date, days_reserved).unwrap()
    candidate = DateInterval(start_date, end_date)

    existing = db.query(Booking).filter(
        Booking.employee_id == employee_id,
        Booking.is_active == True,  # noqa: E712
        Booking.status == BookingStatus.RESERVED,
        Booking.start_date <= end_date,
        Booking.end_date >= start_date
    ).all()

    return check_reservation(
        employee_id,
        candidate,
        [b.as_reservation() for b in existing],
        exclude_record_id=exclude_booking_id,
    ).unwrap()


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    employee_id: Optional[str] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db)
):
    """List active bookings."""
    query = db.query(Booking).filter(Booking.is_active == True)  # noqa: E712

    if employee_id:
        query = query.filter(Booking.employee_id == employee_id)
    if from_date:
        query = query.filter(Booking.end_date >= from_date)
    if to_date:
        query = query.filter(Booking.start_date <= to_date)
    if status_filter:
        query = query.filter(Booking.status == status_filter)

    return query.order_by(Booking.start_date.asc()).all()


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_create: BookingCreate,
    db: Session = Depends(get_db),
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Reserve a number of business days starting on a date."""
    employee = get_employee_or_404(db, booking_create.employee_id, for_update=True)
    if not employee.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot book leave for an inactive employee"
        )

    period = reserve_period(db, calculator, employee.id, booking_create.start_date, booking_create.days_reserved)

    booking = Booking(
        employee_id=employee.id,
        start_date=period.start,
        end_date=period.end,
        days_reserved=booking_create.days_reserved,
        request_notes=booking_create.request_notes,
        status=BookingStatus.RESERVED,
        is_active=True
    )

    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("Booked %s to %s for employee %s", period.start, period.end, employee.id)
    return booking


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    """Get a specific booking."""
    return get_booking_or_404(db, booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    booking_update: BookingUpdate,
    db: Session = Depends(get_db),
    calculator: BusinessDayCalculator = Depends(get_calculator)
):
    """Move or resize a booking. The booking never conflicts with itself."""
    booking = get_booking_or_404(db, booking_id)
    get_employee_or_404(db, booking.employee_id, for_update=True)

    if booking.status == BookingStatus.CANCELLED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot update a cancelled booking"
        )

    period = reserve_period(
        db, calculator, booking.employee_id,
        booking_update.start_date, booking_update.days_reserved,
        exclude_booking_id=booking.id
    )

    booking.start_date = period.start
    booking.end_date = period.end
    booking.days_reserved = booking_update.days_reserved
    booking.request_notes = booking_update.request_notes

    db.commit()
    db.refresh(booking)
    return booking


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(booking_id: str, db: Session = Depends(get_db)):
    """Cancel a booking that has not been turned into a vacation request."""
    booking = get_booking_or_404(db, booking_id)

    if booking.status == BookingStatus.CANCELLED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Booking is already cancelled"
        )
    if booking.vacation_id is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot cancel a booking that has been converted to a vacation request"
        )

    booking.status = BookingStatus.CANCELLED
    db.commit()
    db.refresh(booking)
    logger.info("Cancelled booking %s", booking_id)
    return booking


@router.post("/{booking_id}/link-vacation", response_model=BookingResponse)
def link_booking_to_vacation(
    booking_id: str,
    link: LinkVacationRequest,
    db: Session = Depends(get_db)
):
    """Attach the vacation request that was created from this booking."""
    booking = get_booking_or_404(db, booking_id)

    if booking.status == BookingStatus.CANCELLED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot link a cancelled booking to a vacation"
        )
    if booking.vacation_id is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Booking is already linked to a vacation: {booking.vacation_id}"
        )

    vacation = db.query(Vacation).filter(Vacation.id == link.vacation_id).first()
    if not vacation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vacation request not found: {link.vacation_id}"
        )

    booking.vacation_id = vacation.id
    db.commit()
    db.refresh(booking)
    return booking

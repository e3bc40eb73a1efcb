import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from hr_admin.api.endpoints.employees import get_employee_or_404
from hr_admin.core.business_days import calendar_days_between
from hr_admin.core.conflicts import DateInterval, check_reservation
from hr_admin.db.session import get_db
from hr_admin.models.vacation import Vacation, VacationStatus
from hr_admin.schemas import VacationCreate, VacationUpdate, VacationResponse, ApprovalRequest, RejectRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vacations", tags=["Vacations"])


def get_vacation_or_404(db: Session, vacation_id: str) -> Vacation:
    vacation = db.query(Vacation).filter(Vacation.id == vacation_id).first()
    if not vacation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vacation request not found: {vacation_id}"
        )
    return vacation


def require_pending(vacation: Vacation):
    if vacation.status != VacationStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"The request is not in PENDING status, current status: {vacation.status.value}"
        )


def check_against_approved(
    db: Session,
    employee_id: str,
    start_date: date,
    end_date: date,
    exclude_vacation_id: Optional[str] = None,
) -> DateInterval:
    candidate = DateInterval.of(start_date, end_date).unwrap()

    existing = db.query(Vacation).filter(
        Vacation.employee_id == employee_id,
        Vacation.is_active == True,  # noqa: E712
        Vacation.status == VacationStatus.APPROVED,
        Vacation.start_date <= end_date,
        Vacation.end_date >= start_date
    ).all()

    return check_reservation(
        employee_id,
        candidate,
        [v.as_reservation() for v in existing],
        exclude_record_id=exclude_vacation_id,
    ).unwrap()


@router.get("", response_model=List[VacationResponse])
def list_vacations(
    employee_id: Optional[str] = Query(None),
    status_filter: Optional[VacationStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db)
):
    """List active vacation requests."""
    query = db.query(Vacation).filter(Vacation.is_active == True)  # noqa: E712

    if employee_id:
        query = query.filter(Vacation.employee_id == employee_id)
    if status_filter:
        query = query.filter(Vacation.status == status_filter)

    return query.order_by(Vacation.start_date.asc()).all()


@router.post("", response_model=VacationResponse, status_code=status.HTTP_201_CREATED)
def create_vacation(
    vacation_create: VacationCreate,
    db: Session = Depends(get_db)
):
    """Request a vacation. Days requested is the inclusive calendar-day count of the period."""
    employee = get_employee_or_404(db, vacation_create.employee_id, for_update=True)
    if not employee.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot request a vacation for an inactive employee"
        )

    period = check_against_approved(db, employee.id, vacation_create.start_date, vacation_create.end_date)

    vacation = Vacation(
        employee_id=employee.id,
        start_date=period.start,
        end_date=period.end,
        days_requested=calendar_days_between(period.start, period.end).unwrap(),
        request_notes=vacation_create.request_notes,
        status=VacationStatus.PENDING,
        is_active=True
    )

    db.add(vacation)
    db.commit()
    db.refresh(vacation)
    return vacation


@router.get("/{vacation_id}", response_model=VacationResponse)
def get_vacation(vacation_id: str, db: Session = Depends(get_db)):
    """Get a specific vacation request."""
    return get_vacation_or_404(db, vacation_id)


@router.put("/{vacation_id}", response_model=VacationResponse)
def update_vacation(
    vacation_id: str,
    vacation_update: VacationUpdate,
    db: Session = Depends(get_db)
):
    """Change the period of a PENDING vacation request."""
    vacation = get_vacation_or_404(db, vacation_id)
    get_employee_or_404(db, vacation.employee_id, for_update=True)
    require_pending(vacation)

    period = check_against_approved(
        db, vacation.employee_id,
        vacation_update.start_date, vacation_update.end_date,
        exclude_vacation_id=vacation.id
    )

    vacation.start_date = period.start
    vacation.end_date = period.end
    vacation.days_requested = calendar_days_between(period.start, period.end).unwrap()
    vacation.request_notes = vacation_update.request_notes

    db.commit()
    db.refresh(vacation)
    return vacation


@router.post("/{vacation_id}/approve", response_model=VacationResponse)
def approve_vacation(
    vacation_id: str,
    approval: ApprovalRequest,
    db: Session = Depends(get_db)
):
    """Approve a PENDING request if it does not overlap another approved vacation."""
    vacation = get_vacation_or_404(db, vacation_id)
    employee = get_employee_or_404(db, vacation.employee_id, for_update=True)
    require_pending(vacation)

    check_against_approved(
        db, vacation.employee_id,
        vacation.start_date, vacation.end_date,
        exclude_vacation_id=vacation.id
    )

    vacation.status = VacationStatus.APPROVED
    vacation.approved_by = approval.approved_by
    vacation.approved_at = datetime.utcnow()
    employee.vacation_days_used += vacation.days_requested

    db.commit()
    db.refresh(vacation)
    logger.info("Vacation %s approved by %s", vacation_id, approval.approved_by)
    return vacation


@router.post("/{vacation_id}/reject", response_model=VacationResponse)
def reject_vacation(
    vacation_id: str,
    rejection: RejectRequest,
    db: Session = Depends(get_db)
):
    """Reject a PENDING request with a reason."""
    vacation = get_vacation_or_404(db, vacation_id)
    require_pending(vacation)

    vacation.status = VacationStatus.REJECTED
    vacation.approved_by = rejection.rejected_by
    vacation.approved_at = datetime.utcnow()
    vacation.rejection_reason = rejection.reason

    db.commit()
    db.refresh(vacation)
    logger.info("Vacation %s rejected by %s", vacation_id, rejection.rejected_by)
    return vacation


@router.post("/{vacation_id}/cancel", response_model=VacationResponse)
def cancel_vacation(vacation_id: str, db: Session = Depends(get_db)):
    """Cancel a pending or approved request."""
    vacation = get_vacation_or_404(db, vacation_id)
    employee = get_employee_or_404(db, vacation.employee_id, for_update=True)

    if vacation.status not in (VacationStatus.PENDING, VacationStatus.APPROVED):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot cancel a {vacation.status.value} vacation request"
        )

    if vacation.status == VacationStatus.APPROVED:
        employee.vacation_days_used = max(employee.vacation_days_used - vacation.days_requested, 0)
    vacation.status = VacationStatus.CANCELLED
    db.commit()
    db.refresh(vacation)
    return vacation

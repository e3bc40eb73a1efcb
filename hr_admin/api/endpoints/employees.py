import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from hr_admin.api.dependencies import lock_employee, lock_employees, manager_lookup
from hr_admin.core.hierarchy import ancestor_chain, check_delete, validate_assignment
from hr_admin.db.session import get_db
from hr_admin.models.employee import Employee, EmployeeRole, EmploymentType
from hr_admin.schemas import EmployeeCreate, EmployeeUpdate, EmployeeResponse, ManagerAssignment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_or_404(db: Session, employee_id: str, for_update: bool = False) -> Employee:
    if for_update:
        employee = lock_employee(db, employee_id)
    else:
        employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee not found: {employee_id}"
        )
    return employee


def check_unique_identifiers(db: Session, data, exclude_id: Optional[str] = None):
    """Reject an email, fiscal number or social number already held by another employee."""
    checks = []
    if data.email:
        checks.append(("Email already registered", Employee.email == data.email))
    if data.fiscal_number and data.fiscal_number_country:
        checks.append((
            f"Fiscal number already registered: {data.fiscal_number}",
            (Employee.fiscal_number == data.fiscal_number)
            & (Employee.fiscal_number_country == data.fiscal_number_country),
        ))
    if data.social_number:
        checks.append((
            f"Social number already registered: {data.social_number}",
            Employee.social_number == data.social_number,
        ))

    for message, condition in checks:
        query = db.query(Employee.id).filter(condition)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def assign_manager(db: Session, employee_id: str, manager_id: Optional[str]):
    """Validate and apply a manager change within the caller's transaction."""
    if manager_id is not None:
        manager = get_employee_or_404(db, manager_id, for_update=True)
        if not manager.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Manager is not an active employee"
            )

    max_nodes = db.query(Employee).count() + 1
    validate_assignment(employee_id, manager_id, manager_lookup(db), max_nodes=max_nodes).unwrap()


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    include_inactive: bool = False,
    employee_role: Optional[EmployeeRole] = Query(None),
    employment_type: Optional[EmploymentType] = Query(None),
    search: Optional[str] = Query(None, min_length=1, description="Match on name, surname or email"),
    db: Session = Depends(get_db)
):
    """List employees, active only unless asked otherwise."""
    query = db.query(Employee)
    if not include_inactive:
        query = query.filter(Employee.is_active == True)  # noqa: E712
    if employee_role:
        query = query.filter(Employee.employee_role == employee_role)
    if employment_type:
        query = query.filter(Employee.employment_type == employment_type)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Employee.name.ilike(pattern),
            Employee.surname.ilike(pattern),
            Employee.email.ilike(pattern),
        ))
    return query.order_by(Employee.name.asc(), Employee.surname.asc()).all()


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    employee_create: EmployeeCreate,
    db: Session = Depends(get_db)
):
    """Create an employee, optionally under an existing manager."""
    check_unique_identifiers(db, employee_create)

    employee_id = str(uuid.uuid4())
    if employee_create.manager_id is not None:
        assign_manager(db, employee_id, employee_create.manager_id)

    employee = Employee(id=employee_id, **employee_create.model_dump())
    db.add(employee)
    db.commit()
    db.refresh(employee)
    logger.info("Created employee %s", employee.id)
    return employee


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: str, db: Session = Depends(get_db)):
    """Get a specific employee."""
    return get_employee_or_404(db, employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: str,
    employee_update: EmployeeUpdate,
    db: Session = Depends(get_db)
):
    """Update an employee. A manager change goes through the hierarchy checks."""
    lock_employees(db, [employee_id, employee_update.manager_id])
    employee = get_employee_or_404(db, employee_id)
    check_unique_identifiers(db, employee_update, exclude_id=employee_id)

    update_data = employee_update.model_dump(exclude_unset=True)
    if "manager_id" in update_data:
        assign_manager(db, employee_id, update_data["manager_id"])

    for field, value in update_data.items():
        setattr(employee, field, value)

    db.commit()
    db.refresh(employee)
    return employee


@router.put("/{employee_id}/manager", response_model=EmployeeResponse)
def set_manager(
    employee_id: str,
    assignment: ManagerAssignment,
    db: Session = Depends(get_db)
):
    """Assign (or with a null manager_id, remove) the manager of an employee."""
    lock_employees(db, [employee_id, assignment.manager_id])
    employee = get_employee_or_404(db, employee_id)
    assign_manager(db, employee_id, assignment.manager_id)

    employee.manager_id = assignment.manager_id
    db.commit()
    db.refresh(employee)
    logger.info("Employee %s now reports to %s", employee_id, assignment.manager_id)
    return employee


@router.delete("/{employee_id}/manager", response_model=EmployeeResponse)
def remove_manager(employee_id: str, db: Session = Depends(get_db)):
    """Make an employee a root of the hierarchy."""
    employee = get_employee_or_404(db, employee_id, for_update=True)
    employee.manager_id = None
    db.commit()
    db.refresh(employee)
    return employee


@router.get("/{employee_id}/subordinates", response_model=List[EmployeeResponse])
def list_subordinates(employee_id: str, db: Session = Depends(get_db)):
    """Active direct reports of an employee."""
    get_employee_or_404(db, employee_id)
    return db.query(Employee).filter(
        Employee.manager_id == employee_id,
        Employee.is_active == True  # noqa: E712
    ).order_by(Employee.name.asc()).all()


@router.get("/{employee_id}/management-chain", response_model=List[EmployeeResponse])
def management_chain(employee_id: str, db: Session = Depends(get_db)):
    """Managers of an employee, from the direct manager up to the top of the hierarchy."""
    get_employee_or_404(db, employee_id)
    max_nodes = db.query(Employee).count()
    chain = ancestor_chain(employee_id, manager_lookup(db), max_nodes=max_nodes)
    employees = {e.id: e for e in db.query(Employee).filter(Employee.id.in_(chain)).all()}
    return [employees[eid] for eid in chain]


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_employee(employee_id: str, db: Session = Depends(get_db)):
    """Deactivate an employee. Blocked while they still manage active employees."""
    employee = get_employee_or_404(db, employee_id, for_update=True)
    if not employee.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee already deactivated"
        )

    active_subordinates = db.query(Employee).filter(
        Employee.manager_id == employee_id,
        Employee.is_active == True  # noqa: E712
    ).count()
    check_delete(employee_id, active_subordinates).unwrap()

    employee.is_active = False
    employee.termination_date = date.today()
    db.commit()
    logger.info("Deactivated employee %s", employee_id)
    return None


@router.post("/{employee_id}/restore", response_model=EmployeeResponse)
def restore_employee(employee_id: str, db: Session = Depends(get_db)):
    """Reactivate a deactivated employee."""
    employee = get_employee_or_404(db, employee_id, for_update=True)
    if employee.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee is not deactivated"
        )

    employee.is_active = True
    employee.termination_date = None
    db.commit()
    db.refresh(employee)
    return employee

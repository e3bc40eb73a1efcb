"""
Seed script to create a small sample organisation.
Run this after running migrations.
"""
import logging
from datetime import date

from hr_admin.core.config import settings
from hr_admin.core.logging import configure_logging
from hr_admin.db.session import SessionLocal
from hr_admin.models.employee import Employee, EmployeeRole

logger = logging.getLogger("hr_admin.seed")

SAMPLE_EMPLOYEES = [
    # (name, surname, email, role, manager email)
    ("Helena", "Costa", "helena.costa@example.com", EmployeeRole.ADMIN, None),
    ("Rui", "Martins", "rui.martins@example.com", EmployeeRole.MANAGER, "helena.costa@example.com"),
    ("Joana", "Pereira", "joana.pereira@example.com", EmployeeRole.EMPLOYEE, "rui.martins@example.com"),
    ("Tiago", "Almeida", "tiago.almeida@example.com", EmployeeRole.EMPLOYEE, "rui.martins@example.com"),
]


def seed_database():
    db = SessionLocal()

    try:
        by_email = {}
        for name, surname, email, role, manager_email in SAMPLE_EMPLOYEES:
            employee = db.query(Employee).filter(Employee.email == email).first()
            if employee:
                logger.info("Employee already exists: %s", email)
            else:
                employee = Employee(
                    name=name,
                    surname=surname,
                    email=email,
                    employee_role=role,
                    hire_date=date(2022, 1, 3),
                    vacation_days_balance=22,
                    manager_id=by_email[manager_email].id if manager_email else None
                )
                db.add(employee)
                db.flush()
                logger.info("Created employee: %s", email)
            by_email[email] = employee

        db.commit()
        logger.info("Database seeded successfully")

    except Exception:
        logger.exception("Error seeding database")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    seed_database()

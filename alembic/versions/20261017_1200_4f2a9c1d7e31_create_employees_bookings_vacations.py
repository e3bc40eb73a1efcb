"""create_employees_bookings_vacations

Revision ID: 4f2a9c1d7e31
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f2a9c1d7e31'
down_revision = None
branch_labels = None
depends_on = None

employment_type = sa.Enum(
    'PERMANENT', 'FIXED_TERM', 'TEMPORARY', 'PART_TIME', 'FULL_TIME',
    'ZERO_HOURS', 'FREELANCE', 'INTERNSHIP', 'APPRENTICESHIP',
    name='employmenttype'
)
employee_role = sa.Enum('EMPLOYEE', 'MANAGER', 'HR', 'ADMIN', name='employeerole')
booking_status = sa.Enum('RESERVED', 'CANCELLED', name='bookingstatus')
vacation_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', 'CANCELLED', name='vacationstatus')


def upgrade() -> None:
    # Employees (manager_id forms the reporting hierarchy)
    op.create_table(
        'employees',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('surname', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('fiscal_number', sa.String(20), nullable=True),
        sa.Column('fiscal_number_country', sa.String(2), nullable=True),
        sa.Column('social_number', sa.String(20), nullable=True, unique=True),
        sa.Column('employment_type', employment_type, nullable=False),
        sa.Column('employee_role', employee_role, nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('termination_date', sa.Date(), nullable=True),
        sa.Column('manager_id', sa.String(36), sa.ForeignKey('employees.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('vacation_days_balance', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('vacation_days_used', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_employees_email', 'employees', ['email'], unique=True)
    op.create_index('ix_employees_manager_id', 'employees', ['manager_id'])

    # Vacation requests
    op.create_table(
        'vacations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employee_id', sa.String(36), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('days_requested', sa.Integer(), nullable=False),
        sa.Column('status', vacation_status, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('request_notes', sa.Text(), nullable=True),
        sa.Column('approved_by', sa.String(255), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('start_date <= end_date', name='ck_vacations_period'),
    )
    op.create_index('ix_vacations_employee_id', 'vacations', ['employee_id'])
    op.create_index('ix_vacations_start_date', 'vacations', ['start_date'])
    op.create_index('ix_vacations_end_date', 'vacations', ['end_date'])

    # Bookings (agenda blocks ahead of a vacation request)
    op.create_table(
        'bookings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employee_id', sa.String(36), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('vacation_id', sa.String(36), sa.ForeignKey('vacations.id'), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('days_reserved', sa.Integer(), nullable=False),
        sa.Column('request_notes', sa.Text(), nullable=True),
        sa.Column('status', booking_status, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('start_date <= end_date', name='ck_bookings_period'),
    )
    op.create_index('ix_bookings_employee_id', 'bookings', ['employee_id'])
    op.create_index('ix_bookings_start_date', 'bookings', ['start_date'])
    op.create_index('ix_bookings_end_date', 'bookings', ['end_date'])


def downgrade() -> None:
    op.drop_table('bookings')
    op.drop_table('vacations')
    op.drop_table('employees')
    vacation_status.drop(op.get_bind(), checkfirst=True)
    booking_status.drop(op.get_bind(), checkfirst=True)
    employee_role.drop(op.get_bind(), checkfirst=True)
    employment_type.drop(op.get_bind(), checkfirst=True)

"""Initial leave management schema

Revision ID: 001_initial_leave_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_leave_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEAVE_STATUS = ('REQUESTED', 'APPROVED', 'REJECTED', 'CANCELLED', 'CLOSED')
LEAVE_TYPE = ('REGULAR', 'SPECIAL')
SPECIAL_LEAVE_TYPE = ('MOVING', 'WEDDING', 'CHILD_BIRTH', 'PARENTAL_CARE')

# One type object shared by both tables so the enum type is created once
special_leave_type_enum = sa.Enum(*SPECIAL_LEAVE_TYPE, name='specialleavetype')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'employees',
        sa.Column('id', sa.String(16), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('manager_id', sa.String(16), nullable=True),
        sa.Column('contract_hours', sa.Integer(), nullable=False, server_default='40'),
        sa.Column('is_manager', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['manager_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('contract_hours > 0', name='check_contract_hours_positive'),
    )
    op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
    op.create_index(op.f('ix_employees_manager_id'), 'employees', ['manager_id'], unique=False)

    op.create_table(
        'leaves',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('leave_label', sa.String(255), nullable=False),
        sa.Column('employee_id', sa.String(16), nullable=False),
        sa.Column('start_of_leave', sa.DateTime(), nullable=False),
        sa.Column('end_of_leave', sa.DateTime(), nullable=False),
        sa.Column('approver_id', sa.String(16), nullable=True),
        sa.Column('status', sa.Enum(*LEAVE_STATUS, name='leavestatus'), nullable=False),
        sa.Column('leave_type', sa.Enum(*LEAVE_TYPE, name='leavetype'), nullable=False),
        sa.Column('special_leave_type', special_leave_type_enum, nullable=True),
        sa.Column('total_hours', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.ForeignKeyConstraint(['approver_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_of_leave > start_of_leave', name='check_end_after_start'),
    )
    op.create_index(op.f('ix_leaves_id'), 'leaves', ['id'], unique=False)
    op.create_index(op.f('ix_leaves_employee_id'), 'leaves', ['employee_id'], unique=False)
    op.create_index(op.f('ix_leaves_approver_id'), 'leaves', ['approver_id'], unique=False)
    op.create_index('ix_leaves_employee_dates', 'leaves', ['employee_id', 'start_of_leave', 'end_of_leave'], unique=False)

    op.create_table(
        'leave_balances',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.String(16), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_hours', sa.Float(), nullable=False, server_default='0'),
        sa.Column('used_days', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('used_hours', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id', 'year', name='uq_leave_balances_employee_year'),
    )
    op.create_index(op.f('ix_leave_balances_id'), 'leave_balances', ['id'], unique=False)
    op.create_index(op.f('ix_leave_balances_employee_id'), 'leave_balances', ['employee_id'], unique=False)
    op.create_index(op.f('ix_leave_balances_year'), 'leave_balances', ['year'], unique=False)

    op.create_table(
        'special_leave_usages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.String(16), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('special_leave_type', special_leave_type_enum, nullable=False),
        sa.Column('used_days', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('used_hours', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'employee_id', 'year', 'special_leave_type',
            name='uq_special_leave_usages_employee_year_type',
        ),
    )
    op.create_index(op.f('ix_special_leave_usages_id'), 'special_leave_usages', ['id'], unique=False)
    op.create_index(op.f('ix_special_leave_usages_employee_id'), 'special_leave_usages', ['employee_id'], unique=False)
    op.create_index(op.f('ix_special_leave_usages_year'), 'special_leave_usages', ['year'], unique=False)

    op.create_table(
        'holidays',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('year', 'date', name='uq_holiday_year_date'),
    )
    op.create_index(op.f('ix_holidays_id'), 'holidays', ['id'], unique=False)
    op.create_index(op.f('ix_holidays_year'), 'holidays', ['year'], unique=False)
    op.create_index(op.f('ix_holidays_date'), 'holidays', ['date'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('actor_id', sa.String(16), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('entity_type', sa.String(), nullable=False),
        sa.Column('entity_id', sa.String(), nullable=True),
        sa.Column('meta_json', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)
    op.create_index(op.f('ix_audit_logs_actor_id'), 'audit_logs', ['actor_id'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('holidays')
    op.drop_table('special_leave_usages')
    op.drop_table('leave_balances')
    op.drop_table('leaves')
    op.drop_table('employees')
    sa.Enum(name='specialleavetype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='leavetype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='leavestatus').drop(op.get_bind(), checkfirst=True)

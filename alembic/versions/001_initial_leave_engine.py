"""Initial employees and leave_requests tables

Revision ID: 001_initial_leave_engine
Revises:
Create Date: 2024-01-08

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_leave_engine'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEAVE_TYPES = ('annual', 'sick', 'personal', 'halfday', 'unpaid', 'other', 'workfromhome')
LEAVE_STATUSES = ('pending', 'approved', 'rejected')


def upgrade() -> None:
    existing = sa.inspect(op.get_bind()).get_table_names()

    if 'employees' not in existing:
        op.create_table(
            'employees',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('join_date', sa.Date(), nullable=False),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
        op.create_index(op.f('ix_employees_email'), 'employees', ['email'], unique=True)

    if 'leave_requests' not in existing:
        op.create_table(
            'leave_requests',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('type', sa.Enum(*LEAVE_TYPES, name='leavetype'), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=False),
            sa.Column('reason', sa.Text(), nullable=True),
            sa.Column('status', sa.Enum(*LEAVE_STATUSES, name='leavestatus'), nullable=False, server_default='pending'),
            sa.Column('is_paid', sa.Boolean(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['employees.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.CheckConstraint('start_date <= end_date', name='check_start_date_le_end_date')
        )
        op.create_index(op.f('ix_leave_requests_id'), 'leave_requests', ['id'], unique=False)
        op.create_index(op.f('ix_leave_requests_user_id'), 'leave_requests', ['user_id'], unique=False)
        op.create_index('ix_leave_requests_user_dates', 'leave_requests', ['user_id', 'start_date', 'end_date'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_leave_requests_user_dates', table_name='leave_requests')
    op.drop_index(op.f('ix_leave_requests_user_id'), table_name='leave_requests')
    op.drop_index(op.f('ix_leave_requests_id'), table_name='leave_requests')
    op.drop_table('leave_requests')
    op.drop_index(op.f('ix_employees_email'), table_name='employees')
    op.drop_index(op.f('ix_employees_id'), table_name='employees')
    op.drop_table('employees')
    sa.Enum(name='leavetype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='leavestatus').drop(op.get_bind(), checkfirst=True)

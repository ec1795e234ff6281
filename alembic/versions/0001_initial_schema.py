"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Foreign-key columns are plain integers: references are not enforced and
# deleting a row never cascades.
AUTOINCREMENT = {'sqlite_autoincrement': True}


def _id() -> sa.Column:
    return sa.Column('id', sa.Integer(), autoincrement=True, nullable=False)


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    """Create all entity tables."""
    op.create_table('users',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('avatar', sa.String(length=1024), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('user_type', sa.String(length=50), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_client_id', 'users', ['client_id'], unique=False)

    op.create_table('clients',
        _id(),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('contact_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('cnpj_cpf', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('instagram', sa.String(length=255), nullable=True),
        sa.Column('facebook', sa.String(length=255), nullable=True),
        sa.Column('linkedin', sa.String(length=255), nullable=True),
        sa.Column('payment_day', sa.Integer(), nullable=True),
        sa.Column('contract_value', sa.Float(), nullable=True),
        sa.Column('contract_start', sa.Date(), nullable=True),
        sa.Column('contract_end', sa.Date(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('observations', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_clients_id', 'clients', ['id'], unique=False)

    op.create_table('projects',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('responsible_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_projects_id', 'projects', ['id'], unique=False)
    op.create_index('ix_projects_client_id', 'projects', ['client_id'], unique=False)
    op.create_index('ix_projects_responsible_id', 'projects', ['responsible_id'], unique=False)

    op.create_table('tasks',
        _id(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_id', sa.Integer(), nullable=True),
        sa.Column('assignee_id', sa.Integer(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('priority', sa.String(length=50), nullable=False),
        sa.Column('checklist', sa.JSON(), nullable=True),
        sa.Column('checklist_completed', sa.JSON(), nullable=True),
        _created_at(),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_tasks_id', 'tasks', ['id'], unique=False)
    op.create_index('ix_tasks_project_id', 'tasks', ['project_id'], unique=False)
    op.create_index('ix_tasks_assignee_id', 'tasks', ['assignee_id'], unique=False)

    op.create_table('proposals',
        _id(),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('services', sa.Text(), nullable=True),
        sa.Column('value', sa.Float(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_proposals_id', 'proposals', ['id'], unique=False)
    op.create_index('ix_proposals_client_id', 'proposals', ['client_id'], unique=False)

    op.create_table('invoices',
        _id(),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('payment_link', sa.String(length=1024), nullable=True),
        _created_at(),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_invoices_id', 'invoices', ['id'], unique=False)
    op.create_index('ix_invoices_client_id', 'invoices', ['client_id'], unique=False)
    op.create_index('ix_invoices_project_id', 'invoices', ['project_id'], unique=False)

    op.create_table('expenses',
        _id(),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('recurring', sa.Boolean(), nullable=True),
        sa.Column('recurrence_interval', sa.String(length=50), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_expenses_id', 'expenses', ['id'], unique=False)
    op.create_index('ix_expenses_category', 'expenses', ['category'], unique=False)

    op.create_table('support_tickets',
        _id(),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        _created_at(),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_support_tickets_id', 'support_tickets', ['id'], unique=False)
    op.create_index('ix_support_tickets_client_id', 'support_tickets', ['client_id'], unique=False)

    op.create_table('support_messages',
        _id(),
        sa.Column('ticket_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('is_internal', sa.Boolean(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_support_messages_id', 'support_messages', ['id'], unique=False)
    op.create_index('ix_support_messages_ticket_id', 'support_messages', ['ticket_id'], unique=False)

    op.create_table('calendar_events',
        _id(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('all_day', sa.Boolean(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('task_id', sa.Integer(), nullable=True),
        sa.Column('project_id', sa.Integer(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        **AUTOINCREMENT,
    )
    op.create_index('ix_calendar_events_id', 'calendar_events', ['id'], unique=False)
    op.create_index('ix_calendar_events_user_id', 'calendar_events', ['user_id'], unique=False)
    op.create_index('ix_calendar_events_task_id', 'calendar_events', ['task_id'], unique=False)
    op.create_index('ix_calendar_events_project_id', 'calendar_events', ['project_id'], unique=False)

    # Singleton row, always id = 1
    op.create_table('company_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('cnpj', sa.String(length=50), nullable=True),
        sa.Column('logo', sa.String(length=1024), nullable=True),
        sa.Column('theme', sa.String(length=20), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop all entity tables."""
    op.drop_table('company_settings')
    for table in (
        'calendar_events',
        'support_messages',
        'support_tickets',
        'expenses',
        'invoices',
        'proposals',
        'tasks',
        'projects',
        'clients',
        'users',
    ):
        op.drop_table(table)

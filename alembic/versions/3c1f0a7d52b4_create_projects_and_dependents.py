"""create projects, quotations, teams and dependent records

Revision ID: 3c1f0a7d52b4
Revises:
Create Date: 2026-10-02 10:14:27.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d52b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _soft_delete_columns() -> list:
    return [
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "quotations",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("quotation_number", sa.String(), nullable=True, unique=True),
        sa.Column("project_name", sa.String(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=True),
        sa.Column("client_contact", sa.String(), nullable=True),
        sa.Column("total", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(), nullable=False, server_default="Draft"),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        *_soft_delete_columns(),
        sa.Column("deleted_by", sa.String(), nullable=True),
        sa.CheckConstraint(
            "status IN ('Draft', 'Sent', 'Approved', 'Converted')",
            name="ck_quotations_status",
        ),
    )
    op.create_index("ix_quotations_deleted", "quotations", ["deleted"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_name", sa.String(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=True),
        sa.Column("client_contact", sa.String(), nullable=True),
        sa.Column("project_type", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("project_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("expected_profit_percentage", sa.Numeric(6, 2), nullable=True),
        sa.Column("quotation_id", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        *_soft_delete_columns(),
        sa.Column("deleted_by", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["quotation_id"], ["quotations.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_projects_quotation_id", "projects", ["quotation_id"], unique=False)
    op.create_index("ix_projects_deleted", "projects", ["deleted"], unique=False)

    op.create_table(
        "teams",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("assigned_project_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["assigned_project_id"], ["projects.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_teams_assigned_project_id", "teams", ["assigned_project_id"], unique=False)

    op.create_table(
        "team_members",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("team_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("skills", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"),
        sa.Column("employment_status", sa.String(), nullable=False, server_default="Full-Time"),
        sa.Column("rate_type", sa.String(), nullable=True),
        sa.Column("rate_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        *_soft_delete_columns(),
        sa.Column("deleted_by", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
    )
    op.create_index("ix_team_members_team_id", "team_members", ["team_id"], unique=False)
    op.create_index("ix_team_members_deleted", "team_members", ["deleted"], unique=False)

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
    )
    op.create_index("ix_expenses_project_id", "expenses", ["project_id"], unique=False)
    op.create_index("ix_expenses_expense_date", "expenses", ["expense_date"], unique=False)
    op.create_index("ix_expenses_deleted", "expenses", ["deleted"], unique=False)

    op.create_table(
        "payments",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=True),
        sa.Column("payment_mode", sa.String(), nullable=True),
        sa.Column("reference_number", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
    )
    op.create_index("ix_payments_project_id", "payments", ["project_id"], unique=False)
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"], unique=False)
    op.create_index("ix_payments_deleted", "payments", ["deleted"], unique=False)

    op.create_table(
        "materials",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=True),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("rate", sa.Numeric(14, 2), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
    )
    op.create_index("ix_materials_project_id", "materials", ["project_id"], unique=False)
    op.create_index("ix_materials_deleted", "materials", ["deleted"], unique=False)

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="Not Started"),
        sa.Column("priority", sa.String(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
    )
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"], unique=False)
    op.create_index("ix_tasks_deleted", "tasks", ["deleted"], unique=False)

    op.create_table(
        "team_work_entries",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("team_member_id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("work_date", sa.Date(), nullable=False),
        sa.Column("task_name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=False, server_default="1"),
        sa.Column("rate", sa.Numeric(14, 2), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("payment_status", sa.String(), nullable=False, server_default="Pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["team_member_id"], ["team_members.id"]),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
    )
    op.create_index("ix_team_work_entries_team_member_id", "team_work_entries", ["team_member_id"], unique=False)
    op.create_index("ix_team_work_entries_project_id", "team_work_entries", ["project_id"], unique=False)
    op.create_index("ix_team_work_entries_work_date", "team_work_entries", ["work_date"], unique=False)
    op.create_index("ix_team_work_entries_deleted", "team_work_entries", ["deleted"], unique=False)

    op.create_table(
        "supplier_payments",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("supplier_id", sa.String(), nullable=False),
        sa.Column("expense_id", sa.String(), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("payment_mode", sa.String(), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        *_soft_delete_columns(),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"]),
    )
    op.create_index("ix_supplier_payments_supplier_id", "supplier_payments", ["supplier_id"], unique=False)
    op.create_index("ix_supplier_payments_expense_id", "supplier_payments", ["expense_id"], unique=False)
    op.create_index("ix_supplier_payments_deleted", "supplier_payments", ["deleted"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("supplier_payments")
    op.drop_table("team_work_entries")
    op.drop_table("tasks")
    op.drop_table("materials")
    op.drop_table("payments")
    op.drop_table("expenses")
    op.drop_table("team_members")
    op.drop_table("teams")
    op.drop_table("projects")
    op.drop_table("quotations")

"""add task and supplier payment trash, expense payment status

Revision ID: b5d7e2a91c36
Revises: 8e24b6c9f0d1
Create Date: 2026-10-19 09:41:12.530871

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'b5d7e2a91c36'
down_revision: Union[str, Sequence[str], None] = '8e24b6c9f0d1'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SNAPSHOT_TABLES = ("task_trash", "supplier_payment_trash")


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column("tasks", sa.Column("deleted_by", sa.String(), nullable=True))
    op.add_column("tasks", sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))

    op.add_column("supplier_payments", sa.Column("deleted_by", sa.String(), nullable=True))
    op.add_column("supplier_payments", sa.Column("notes", sa.Text(), nullable=True))

    op.add_column(
        "expenses",
        sa.Column("payment_status", sa.String(), nullable=False, server_default="Unpaid"),
    )
    op.add_column("expenses", sa.Column("supplier_id", sa.String(), nullable=True))
    op.create_index("ix_expenses_supplier_id", "expenses", ["supplier_id"], unique=False)
    op.create_check_constraint(
        "ck_expenses_payment_status",
        "expenses",
        "payment_status IN ('Paid', 'Unpaid')",
    )

    for table in SNAPSHOT_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.String(), primary_key=True, nullable=False),
            sa.Column("original_id", sa.String(), nullable=False),
            sa.Column("snapshot", postgresql.JSONB(), nullable=False),
            sa.Column("deleted_by", sa.String(), nullable=True),
            sa.Column("reason", sa.Text(), nullable=True),
            sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("retention_until", sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index(f"ix_{table}_original_id", table, ["original_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in SNAPSHOT_TABLES:
        op.drop_index(f"ix_{table}_original_id", table_name=table)
        op.drop_table(table)

    op.drop_constraint("ck_expenses_payment_status", "expenses", type_="check")
    op.drop_index("ix_expenses_supplier_id", table_name="expenses")
    op.drop_column("expenses", "supplier_id")
    op.drop_column("expenses", "payment_status")

    op.drop_column("supplier_payments", "notes")
    op.drop_column("supplier_payments", "deleted_by")

    op.drop_column("tasks", "updated_at")
    op.drop_column("tasks", "deleted_by")

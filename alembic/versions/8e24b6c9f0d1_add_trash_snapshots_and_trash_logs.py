"""add trash snapshot tables and trash_logs

Revision ID: 8e24b6c9f0d1
Revises: 3c1f0a7d52b4
Create Date: 2026-10-02 11:02:51.604417

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '8e24b6c9f0d1'
down_revision: Union[str, Sequence[str], None] = '3c1f0a7d52b4'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SNAPSHOT_TABLES = ("team_member_trash", "quotation_trash")


def upgrade() -> None:
    """Upgrade schema."""
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

    op.create_table(
        "trash_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("item_type", sa.String(), nullable=False),
        sa.Column("item_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("actor_user_id", sa.String(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("action IN ('move', 'restore', 'purge')", name="ck_trash_logs_action"),
    )
    op.create_index("ix_trash_logs_item", "trash_logs", ["item_type", "item_id"], unique=False)
    op.create_index("ix_trash_logs_timestamp", "trash_logs", ["timestamp"], unique=False)

    # ledger is append-only
    op.execute(
        """
        CREATE OR REPLACE FUNCTION trash_logs_block_mutation()
        RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'trash_logs is append-only';
        END;
        $$ LANGUAGE plpgsql;

        DROP TRIGGER IF EXISTS trg_trash_logs_block_update ON trash_logs;
        CREATE TRIGGER trg_trash_logs_block_update
        BEFORE UPDATE ON trash_logs
        FOR EACH ROW
        EXECUTE FUNCTION trash_logs_block_mutation();

        DROP TRIGGER IF EXISTS trg_trash_logs_block_delete ON trash_logs;
        CREATE TRIGGER trg_trash_logs_block_delete
        BEFORE DELETE ON trash_logs
        FOR EACH ROW
        EXECUTE FUNCTION trash_logs_block_mutation();
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute(
        """
        DROP TRIGGER IF EXISTS trg_trash_logs_block_update ON trash_logs;
        DROP TRIGGER IF EXISTS trg_trash_logs_block_delete ON trash_logs;
        DROP FUNCTION IF EXISTS trash_logs_block_mutation();
        """
    )
    op.drop_index("ix_trash_logs_timestamp", table_name="trash_logs")
    op.drop_index("ix_trash_logs_item", table_name="trash_logs")
    op.drop_table("trash_logs")

    for table in SNAPSHOT_TABLES:
        op.drop_index(f"ix_{table}_original_id", table_name=table)
        op.drop_table(table)

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.schema import Index

from app.database import Base
from app.models.mixins import new_id

TRASH_ACTIONS = ("move", "restore", "purge")


class TrashSnapshotMixin:
    id = Column(String, primary_key=True, default=new_id)
    # back-reference only; the live row is not owned by the snapshot
    original_id = Column(String, nullable=False, index=True)
    snapshot = Column(JSONB, nullable=False)
    deleted_by = Column(String, nullable=True)
    reason = Column(Text, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=False)
    retention_until = Column(DateTime(timezone=True), nullable=False)


class TeamMemberTrash(TrashSnapshotMixin, Base):
    __tablename__ = "team_member_trash"


class QuotationTrash(TrashSnapshotMixin, Base):
    __tablename__ = "quotation_trash"


class TaskTrash(TrashSnapshotMixin, Base):
    __tablename__ = "task_trash"


class SupplierPaymentTrash(TrashSnapshotMixin, Base):
    __tablename__ = "supplier_payment_trash"


class TrashLog(Base):
    """Append-only. Nothing in the application updates or deletes these rows."""

    __tablename__ = "trash_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_type = Column(String, nullable=False)
    item_id = Column(String, nullable=False)
    action = Column(String, nullable=False)
    actor_user_id = Column(String, nullable=True)
    reason = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_trash_logs_item", "item_type", "item_id"),
        Index("ix_trash_logs_timestamp", "timestamp"),
    )

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, false


def new_id() -> str:
    return str(uuid.uuid4())


class SoftDeleteMixin:
    """deleted flag plus the instant it was set; cleared together on restore."""

    deleted = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    def mark_deleted(self, now, actor_user_id=None):
        self.deleted = True
        self.deleted_at = now
        if hasattr(self, "deleted_by"):
            self.deleted_by = actor_user_id

    def mark_restored(self):
        self.deleted = False
        self.deleted_at = None
        if hasattr(self, "deleted_by"):
            self.deleted_by = None


class DeletedByMixin:
    deleted_by = Column(String, nullable=True)

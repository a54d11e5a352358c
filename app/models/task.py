from sqlalchemy import Column, Date, DateTime, ForeignKey, String, func

from app.database import Base
from app.models.mixins import DeletedByMixin, SoftDeleteMixin, new_id


class Task(SoftDeleteMixin, DeletedByMixin, Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=new_id)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    status = Column(String, nullable=False, default="Not Started")
    priority = Column(String, nullable=True)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func

from app.database import Base
from app.models.mixins import SoftDeleteMixin, new_id


class TeamWorkEntry(SoftDeleteMixin, Base):
    __tablename__ = "team_work_entries"

    id = Column(String, primary_key=True, default=new_id)
    team_member_id = Column(String, ForeignKey("team_members.id"), nullable=False, index=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=True, index=True)
    work_date = Column(Date, nullable=False, index=True)
    task_name = Column(String, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=False, default=1)
    rate = Column(Numeric(14, 2), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    payment_status = Column(String, nullable=False, default="Pending")  # Pending|Paid|Partial
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

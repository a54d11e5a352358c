from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func

from app.database import Base
from app.models.mixins import DeletedByMixin, SoftDeleteMixin, new_id


class Project(SoftDeleteMixin, DeletedByMixin, Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=new_id)
    project_name = Column(String, nullable=False)
    client_name = Column(String, nullable=True)
    client_contact = Column(String, nullable=True)
    project_type = Column(String, nullable=True)

    status = Column(String, nullable=True)  # Ongoing|Completed|Cancelled

    start_date = Column(Date, nullable=True)
    deadline = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)  # legacy mirror of deadline

    project_amount = Column(Numeric(14, 2), nullable=True)
    expected_profit_percentage = Column(Numeric(6, 2), nullable=True)

    quotation_id = Column(String, ForeignKey("quotations.id", ondelete="SET NULL"), nullable=True, index=True)

    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

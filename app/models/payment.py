from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func

from app.database import Base
from app.models.mixins import SoftDeleteMixin, new_id


class Payment(SoftDeleteMixin, Base):
    __tablename__ = "payments"

    id = Column(String, primary_key=True, default=new_id)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    payment_date = Column(Date, nullable=True, index=True)
    payment_mode = Column(String, nullable=True)
    reference_number = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func

from app.database import Base
from app.models.mixins import SoftDeleteMixin, new_id


class Material(SoftDeleteMixin, Base):
    __tablename__ = "materials"

    id = Column(String, primary_key=True, default=new_id)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    item_name = Column(String, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=True)
    unit = Column(String, nullable=True)
    rate = Column(Numeric(14, 2), nullable=True)
    amount = Column(Numeric(14, 2), nullable=True)
    purchase_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

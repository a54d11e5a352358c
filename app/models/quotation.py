from sqlalchemy import Column, DateTime, Numeric, String, func

from app.database import Base
from app.models.mixins import DeletedByMixin, SoftDeleteMixin, new_id

QUOTATION_STATUSES = ("Draft", "Sent", "Approved", "Converted")


class Quotation(SoftDeleteMixin, DeletedByMixin, Base):
    __tablename__ = "quotations"

    id = Column(String, primary_key=True, default=new_id)
    quotation_number = Column(String, nullable=True, unique=True)
    project_name = Column(String, nullable=False)
    client_name = Column(String, nullable=True)
    client_contact = Column(String, nullable=True)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    status = Column(String, nullable=False, default="Draft")

    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Text, func

from app.database import Base
from app.models.mixins import DeletedByMixin, SoftDeleteMixin, new_id


class SupplierPayment(SoftDeleteMixin, DeletedByMixin, Base):
    __tablename__ = "supplier_payments"

    id = Column(String, primary_key=True, default=new_id)
    supplier_id = Column(String, nullable=False, index=True)
    # belongs to a project only through its expense
    expense_id = Column(String, ForeignKey("expenses.id"), nullable=True, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    payment_mode = Column(String, nullable=False)  # Cash|Cheque|UPI|Banking|Other
    payment_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

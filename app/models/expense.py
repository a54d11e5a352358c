from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Numeric, String, Text, func

from app.database import Base
from app.models.mixins import SoftDeleteMixin, new_id

EXPENSE_PAYMENT_STATUSES = ("Paid", "Unpaid")


class Expense(SoftDeleteMixin, Base):
    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=new_id)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    expense_date = Column(Date, nullable=True, index=True)
    payment_status = Column(String, nullable=False, default="Unpaid", server_default="Unpaid")
    supplier_id = Column(String, nullable=True, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("payment_status IN ('Paid', 'Unpaid')", name="ck_expenses_payment_status"),
    )

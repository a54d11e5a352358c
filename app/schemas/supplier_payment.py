from datetime import date, datetime
from typing import Optional

from app.schemas.base import CamelModel


class SupplierPaymentResponse(CamelModel):
    id: str
    supplier_id: str
    expense_id: Optional[str] = None
    amount: float
    payment_mode: str
    payment_date: date
    notes: Optional[str] = None
    created_at: datetime
    deleted: bool
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

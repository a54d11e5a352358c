from datetime import datetime
from typing import Literal, Optional

from app.schemas.base import CamelModel

QuotationStatus = Literal["Draft", "Sent", "Approved", "Converted"]


class QuotationCreate(CamelModel):
    quotation_number: Optional[str] = None
    project_name: str
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    total: float = 0
    status: QuotationStatus = "Draft"
    created_by: Optional[str] = None


class QuotationResponse(CamelModel):
    id: str
    quotation_number: Optional[str] = None
    project_name: str
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    total: float
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted: bool
    deleted_at: Optional[datetime] = None


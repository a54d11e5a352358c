from datetime import date, datetime
from typing import Optional

from app.schemas.base import CamelModel


class TaskResponse(CamelModel):
    id: str
    project_id: str
    title: str
    status: str
    priority: Optional[str] = None
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted: bool
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

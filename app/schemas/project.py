from datetime import date, datetime
from typing import Optional, Union

from pydantic import Field, field_validator

from app.schemas.base import CamelModel
from app.services.project_service import from_db_status

Number = Union[float, str]


class ProjectCreate(CamelModel):
    project_name: str
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    project_type: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    project_amount: Optional[Number] = None
    expected_profit_percentage: Optional[Number] = None
    created_by: Optional[str] = None

    @field_validator("start_date", "deadline", mode="before")
    @classmethod
    def _blank_date(cls, v):
        return None if v == "" else v


class ProjectUpdate(ProjectCreate):
    project_name: Optional[str] = None


class ProjectResponse(CamelModel):
    id: str
    project_name: str
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    project_type: Optional[str] = None
    status: str
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    project_amount: float = 0
    expected_profit_percentage: float = 0
    quotation_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted: bool
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
    total_tasks: int = Field(default=0)
    completed_tasks: int = Field(default=0)

    @field_validator("status", mode="before")
    @classmethod
    def _display_status(cls, v):
        return from_db_status(v)

    @field_validator("project_amount", "expected_profit_percentage", mode="before")
    @classmethod
    def _zero_if_null(cls, v):
        return 0 if v is None else v


class ProjectDeleted(CamelModel):
    success: bool
    id: str

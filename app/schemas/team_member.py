from datetime import datetime
from typing import List, Literal, Optional

from app.schemas.base import CamelModel


class TeamMemberCreate(CamelModel):
    team_id: Optional[str] = None
    name: str
    contact: Optional[str] = None
    age: Optional[int] = None
    skills: List[str] = []
    employment_status: Literal["Full-Time", "Part-Time", "Contractor"] = "Full-Time"
    rate_type: Optional[str] = None
    rate_amount: float = 0
    photo_url: Optional[str] = None
    notes: Optional[str] = None


class TeamMemberResponse(CamelModel):
    id: str
    team_id: Optional[str] = None
    name: str
    contact: Optional[str] = None
    age: Optional[int] = None
    skills: List[str] = []
    employment_status: str
    rate_type: Optional[str] = None
    rate_amount: float
    photo_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted: bool
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None


class TeamMemberDeleteRequest(CamelModel):
    reason: Optional[str] = None
    deleted_by: Optional[str] = None

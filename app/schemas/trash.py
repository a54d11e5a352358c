from datetime import datetime
from typing import Any, Optional

from app.schemas.base import CamelModel


class ActorRequest(CamelModel):
    actor_user_id: Optional[str] = None


class MoveToTrashRequest(ActorRequest):
    reason: Optional[str] = None


class TrashSnapshotResponse(CamelModel):
    id: str
    original_id: str
    snapshot: dict[str, Any]
    deleted_by: Optional[str] = None
    reason: Optional[str] = None
    deleted_at: datetime
    retention_until: datetime


class TrashLogResponse(CamelModel):
    id: int
    item_type: str
    item_id: str
    action: str
    actor_user_id: Optional[str] = None
    reason: Optional[str] = None
    timestamp: datetime


class Ack(CamelModel):
    ok: bool

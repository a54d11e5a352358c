from typing import Optional

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.models.task import Task
from app.schemas.task import TaskResponse
from app.schemas.trash import Ack, ActorRequest, MoveToTrashRequest
from app.services import trash_service

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, database: Database = Depends(get_database)):
    db = database.session()
    try:
        row = db.query(Task).filter(Task.id == task_id).first()
        if row is None:
            raise ApiError(404, "Not found")
        return row
    finally:
        db.close()


@router.delete("/{task_id}", response_model=Ack)
def delete_task(
    task_id: str,
    payload: Optional[MoveToTrashRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or MoveToTrashRequest()
    try:
        return trash_service.move_to_trash(
            database,
            trash_service.TASKS,
            task_id,
            reason=payload.reason,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to delete task", exc) from exc


@router.post("/{task_id}/restore", response_model=Ack)
def restore_task(
    task_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.restore_from_trash(
            database,
            trash_service.TASKS,
            task_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to restore task", exc) from exc

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.core.errors import failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.schemas.project import ProjectResponse
from app.schemas.trash import Ack, ActorRequest, TrashLogResponse, TrashSnapshotResponse
from app.services import project_cascade, trash_service

router = APIRouter(prefix="/trash", tags=["Trash"])


@router.get("/projects", response_model=List[ProjectResponse])
def list_trashed_projects(database: Database = Depends(get_database)):
    try:
        return project_cascade.list_deleted_projects(database)
    except Exception as exc:
        raise failure("Failed to get trash list", exc) from exc


@router.delete("/projects/{project_id}")
def purge_project(
    project_id: str,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    try:
        return project_cascade.purge_project(database, project_id, actor_user_id=actor)
    except Exception as exc:
        raise failure("Failed to permanently delete project", exc) from exc


@router.get("/team-members", response_model=List[TrashSnapshotResponse])
def list_team_member_trash(database: Database = Depends(get_database)):
    try:
        return trash_service.list_trash(database, trash_service.TEAM_MEMBERS)
    except Exception as exc:
        raise failure("Failed to get trash list", exc) from exc


@router.delete("/team-members/{member_id}", response_model=Ack)
def purge_team_member(
    member_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.purge_from_trash(
            database,
            trash_service.TEAM_MEMBERS,
            member_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to purge team member", exc) from exc


@router.get("/quotations", response_model=List[TrashSnapshotResponse])
def list_quotation_trash(database: Database = Depends(get_database)):
    try:
        return trash_service.list_trash(database, trash_service.QUOTATIONS)
    except Exception as exc:
        raise failure("Failed to get trash list", exc) from exc


@router.delete("/quotations/{quotation_id}", response_model=Ack)
def purge_quotation(
    quotation_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.purge_from_trash(
            database,
            trash_service.QUOTATIONS,
            quotation_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to purge quotation", exc) from exc


@router.get("/logs", response_model=List[TrashLogResponse])
def list_trash_logs(database: Database = Depends(get_database)):
    try:
        return trash_service.list_trash_logs(database)
    except Exception as exc:
        raise failure("Failed to get trash logs", exc) from exc


@router.get("/tasks", response_model=List[TrashSnapshotResponse])
def list_task_trash(database: Database = Depends(get_database)):
    try:
        return trash_service.list_trash(database, trash_service.TASKS)
    except Exception as exc:
        raise failure("Failed to get trash list", exc) from exc


@router.delete("/tasks/{task_id}", response_model=Ack)
def purge_task(
    task_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.purge_from_trash(
            database,
            trash_service.TASKS,
            task_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to purge task", exc) from exc


@router.get("/supplier-payments", response_model=List[TrashSnapshotResponse])
def list_supplier_payment_trash(database: Database = Depends(get_database)):
    try:
        return trash_service.list_trash(database, trash_service.SUPPLIER_PAYMENTS)
    except Exception as exc:
        raise failure("Failed to get trash list", exc) from exc


@router.delete("/supplier-payments/{payment_id}", response_model=Ack)
def purge_supplier_payment(
    payment_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.purge_from_trash(
            database,
            trash_service.SUPPLIER_PAYMENTS,
            payment_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to purge supplier payment", exc) from exc

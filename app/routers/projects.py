from typing import List, Optional

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, NotFoundError, failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.schemas.project import ProjectCreate, ProjectDeleted, ProjectResponse, ProjectUpdate
from app.services import project_cascade, project_service

router = APIRouter(prefix="/projects", tags=["Projects"])


def _with_task_counts(project, total_tasks: int, completed_tasks: int) -> ProjectResponse:
    response = ProjectResponse.model_validate(project)
    response.total_tasks = total_tasks
    response.completed_tasks = completed_tasks
    return response


@router.get("", response_model=List[ProjectResponse])
def list_projects(database: Database = Depends(get_database)):
    return [_with_task_counts(p, t, c) for p, t, c in project_service.list_projects(database)]


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, database: Database = Depends(get_database)):
    try:
        return project_service.get_project(database, project_id)
    except NotFoundError as exc:
        raise ApiError(404, "Not found") from exc


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    payload: ProjectCreate,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    data = payload.model_dump()
    if data.get("created_by") is None:
        data["created_by"] = actor
    try:
        return project_service.create_project(database, data)
    except ValueError as exc:
        raise ApiError(400, str(exc)) from exc


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    database: Database = Depends(get_database),
):
    try:
        return project_service.update_project(
            database,
            project_id,
            payload.model_dump(exclude_unset=True),
        )
    except NotFoundError as exc:
        raise ApiError(404, "Not found") from exc
    except ValueError as exc:
        raise ApiError(400, str(exc)) from exc


@router.delete("/{project_id}", response_model=ProjectDeleted)
def delete_project(
    project_id: str,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    try:
        return project_cascade.soft_delete_project(database, project_id, actor_user_id=actor)
    except Exception as exc:
        raise failure("Failed to delete project", exc) from exc


@router.post("/{project_id}/restore", response_model=ProjectResponse)
def restore_project(
    project_id: str,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    try:
        return project_cascade.restore_project(database, project_id, actor_user_id=actor)
    except Exception as exc:
        raise failure("Failed to restore project", exc) from exc

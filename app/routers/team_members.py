from typing import List, Optional

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.models.team import Team, TeamMember
from app.schemas.team_member import TeamMemberCreate, TeamMemberDeleteRequest, TeamMemberResponse
from app.schemas.trash import Ack, ActorRequest
from app.services import trash_service

router = APIRouter(prefix="/team-members", tags=["Team Members"])


@router.get("", response_model=List[TeamMemberResponse])
def list_team_members(
    status: Optional[str] = None,
    database: Database = Depends(get_database),
):
    db = database.session()
    try:
        q = db.query(TeamMember).filter(TeamMember.deleted.is_(False))
        if status:
            q = q.filter(TeamMember.employment_status == status)
        return q.order_by(TeamMember.name.asc(), TeamMember.id.asc()).all()
    finally:
        db.close()


@router.get("/{member_id}", response_model=TeamMemberResponse)
def get_team_member(member_id: str, database: Database = Depends(get_database)):
    # soft-deleted members stay reachable by id
    db = database.session()
    try:
        row = db.query(TeamMember).filter(TeamMember.id == member_id).first()
        if row is None:
            raise ApiError(404, "Not found")
        return row
    finally:
        db.close()


@router.post("", response_model=TeamMemberResponse, status_code=201)
def create_team_member(payload: TeamMemberCreate, database: Database = Depends(get_database)):
    db = database.session()
    try:
        if payload.team_id is not None:
            team = db.query(Team).filter(Team.id == payload.team_id).first()
            if team is None:
                raise ApiError(400, "Invalid teamId")

        row = TeamMember(**payload.model_dump())
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    finally:
        db.close()


@router.delete("/{member_id}", response_model=Ack)
def delete_team_member(
    member_id: str,
    payload: Optional[TeamMemberDeleteRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or TeamMemberDeleteRequest()
    try:
        return trash_service.move_to_trash(
            database,
            trash_service.TEAM_MEMBERS,
            member_id,
            reason=payload.reason,
            actor_user_id=payload.deleted_by or actor,
        )
    except Exception as exc:
        raise failure("Failed to delete team member", exc) from exc


@router.post("/{member_id}/restore", response_model=Ack)
def restore_team_member(
    member_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.restore_from_trash(
            database,
            trash_service.TEAM_MEMBERS,
            member_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to restore team member", exc) from exc

from typing import Optional

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.models.quotation import Quotation
from app.schemas.project import ProjectResponse
from app.schemas.quotation import QuotationCreate, QuotationResponse
from app.schemas.trash import Ack, ActorRequest, MoveToTrashRequest
from app.services import project_service, trash_service

router = APIRouter(prefix="/quotations", tags=["Quotations"])


@router.post("", response_model=QuotationResponse, status_code=201)
def create_quotation(payload: QuotationCreate, database: Database = Depends(get_database)):
    db = database.session()
    try:
        row = Quotation(**payload.model_dump())
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    finally:
        db.close()


@router.get("/{quotation_id}", response_model=QuotationResponse)
def get_quotation(quotation_id: str, database: Database = Depends(get_database)):
    db = database.session()
    try:
        row = db.query(Quotation).filter(Quotation.id == quotation_id).first()
        if row is None:
            raise ApiError(404, "Not found")
        return row
    finally:
        db.close()


@router.post("/{quotation_id}/convert", response_model=ProjectResponse, status_code=201)
def convert_quotation(
    quotation_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return project_service.convert_quotation(
            database,
            quotation_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to convert quotation", exc) from exc


@router.delete("/{quotation_id}", response_model=Ack)
def delete_quotation(
    quotation_id: str,
    payload: Optional[MoveToTrashRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or MoveToTrashRequest()
    try:
        return trash_service.move_to_trash(
            database,
            trash_service.QUOTATIONS,
            quotation_id,
            reason=payload.reason,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to delete quotation", exc) from exc


@router.post("/{quotation_id}/restore", response_model=Ack)
def restore_quotation(
    quotation_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.restore_from_trash(
            database,
            trash_service.QUOTATIONS,
            quotation_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to restore quotation", exc) from exc

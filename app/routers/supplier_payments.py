from typing import Optional

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, failure
from app.database import Database
from app.deps.auth import optional_actor
from app.deps.database import get_database
from app.models.supplier_payment import SupplierPayment
from app.schemas.supplier_payment import SupplierPaymentResponse
from app.schemas.trash import Ack, ActorRequest, MoveToTrashRequest
from app.services import trash_service

router = APIRouter(prefix="/supplier-payments", tags=["Supplier Payments"])


@router.get("/{payment_id}", response_model=SupplierPaymentResponse)
def get_supplier_payment(payment_id: str, database: Database = Depends(get_database)):
    db = database.session()
    try:
        row = db.query(SupplierPayment).filter(SupplierPayment.id == payment_id).first()
        if row is None:
            raise ApiError(404, "Not found")
        return row
    finally:
        db.close()


@router.delete("/{payment_id}", response_model=Ack)
def delete_supplier_payment(
    payment_id: str,
    payload: Optional[MoveToTrashRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    """Trash the payment; the linked expense is re-marked Paid/Unpaid from what remains."""
    payload = payload or MoveToTrashRequest()
    try:
        return trash_service.move_to_trash(
            database,
            trash_service.SUPPLIER_PAYMENTS,
            payment_id,
            reason=payload.reason,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to delete supplier payment", exc) from exc


@router.post("/{payment_id}/restore", response_model=Ack)
def restore_supplier_payment(
    payment_id: str,
    payload: Optional[ActorRequest] = None,
    database: Database = Depends(get_database),
    actor: Optional[str] = Depends(optional_actor),
):
    payload = payload or ActorRequest()
    try:
        return trash_service.restore_from_trash(
            database,
            trash_service.SUPPLIER_PAYMENTS,
            payment_id,
            actor_user_id=payload.actor_user_id or actor,
        )
    except Exception as exc:
        raise failure("Failed to restore supplier payment", exc) from exc

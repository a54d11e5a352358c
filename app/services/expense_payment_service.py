from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.expense import Expense
from app.models.supplier_payment import SupplierPayment


def recalculate_payment_status(
    db: Session,
    expense_id: Optional[str],
    *,
    now: datetime,
    link_supplier_id: Optional[str] = None,
) -> Optional[str]:
    """
    Set an expense Paid or Unpaid from the sum of its live supplier payments.

    ``link_supplier_id`` fills ``expenses.supplier_id`` only when the expense has
    no supplier yet; an existing link is never removed. Returns the new status,
    or None when the expense is missing or soft-deleted.
    """
    if not expense_id:
        return None

    expense = (
        db.query(Expense)
        .filter(Expense.id == expense_id, Expense.deleted.is_(False))
        .with_for_update()
        .first()
    )
    if expense is None:
        return None

    total_paid = (
        db.query(func.coalesce(func.sum(SupplierPayment.amount), 0))
        .filter(SupplierPayment.expense_id == expense_id, SupplierPayment.deleted.is_(False))
        .scalar()
    )

    status = "Paid" if Decimal(total_paid) >= expense.amount else "Unpaid"
    expense.payment_status = status
    if link_supplier_id and not expense.supplier_id:
        expense.supplier_id = link_supplier_id
    expense.updated_at = now
    db.flush()
    return status


def sync_expense_after_move(db: Session, payment: SupplierPayment, now: datetime) -> None:
    recalculate_payment_status(db, payment.expense_id, now=now)


def sync_expense_after_restore(db: Session, payment: SupplierPayment, now: datetime) -> None:
    recalculate_payment_status(
        db,
        payment.expense_id,
        now=now,
        link_supplier_id=payment.supplier_id,
    )

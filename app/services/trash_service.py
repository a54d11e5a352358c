import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.database import Base, Database
from app.models.quotation import Quotation
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.team import TeamMember
from app.models.trash import (
    TRASH_ACTIONS,
    QuotationTrash,
    SupplierPaymentTrash,
    TaskTrash,
    TeamMemberTrash,
    TrashLog,
)
from app.services.expense_payment_service import sync_expense_after_move, sync_expense_after_restore

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30
TRASH_LOG_LIMIT = 200


@dataclass(frozen=True)
class TrashableEntity:
    model: type
    trash_model: type
    item_type: str
    # True: purge removes the live row as well. False: purge drops only the snapshot.
    purge_live_row: bool
    # run inside the transaction after the row changed state: (db, row, now)
    on_move: Optional[Callable[[Session, Any, datetime], None]] = None
    on_restore: Optional[Callable[[Session, Any, datetime], None]] = None


TEAM_MEMBERS = TrashableEntity(
    model=TeamMember,
    trash_model=TeamMemberTrash,
    item_type="team_member",
    purge_live_row=False,
)

QUOTATIONS = TrashableEntity(
    model=Quotation,
    trash_model=QuotationTrash,
    item_type="quotation",
    purge_live_row=True,
)

TASKS = TrashableEntity(
    model=Task,
    trash_model=TaskTrash,
    item_type="task",
    purge_live_row=True,
)

SUPPLIER_PAYMENTS = TrashableEntity(
    model=SupplierPayment,
    trash_model=SupplierPaymentTrash,
    item_type="supplier_payment",
    purge_live_row=True,
    on_move=sync_expense_after_move,
    on_restore=sync_expense_after_restore,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def retention_days() -> int:
    raw = os.getenv("TRASH_RETENTION_DAYS")
    if raw is None or raw.strip() == "":
        return DEFAULT_RETENTION_DAYS
    try:
        days = int(raw)
    except ValueError as exc:
        raise ValueError(f"TRASH_RETENTION_DAYS must be an integer, got {raw!r}") from exc
    if days < 0:
        raise ValueError("TRASH_RETENTION_DAYS must not be negative")
    return days


def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def row_snapshot(row: Base) -> dict[str, Any]:
    """Point-in-time copy of every mapped column, keyed by column name."""
    mapper = inspect(row).mapper
    return {
        attr.columns[0].name: _json_value(getattr(row, attr.key))
        for attr in mapper.column_attrs
    }


def append_trash_log(
    db: Session,
    item_type: str,
    item_id: str,
    action: str,
    *,
    actor_user_id: Optional[str] = None,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TrashLog:
    if action not in TRASH_ACTIONS:
        raise ValueError(f"Invalid trash action: {action}")

    entry = TrashLog(
        item_type=item_type,
        item_id=str(item_id),
        action=action,
        actor_user_id=actor_user_id,
        reason=reason,
        timestamp=now or _utcnow(),
    )
    db.add(entry)
    db.flush()
    return entry


def move_to_trash(
    database: Database,
    entity: TrashableEntity,
    item_id: str,
    *,
    reason: Optional[str] = None,
    actor_user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    model = entity.model
    days = retention_days()

    def _run(db: Session) -> dict[str, Any]:
        stamp = now or _utcnow()
        row = (
            db.query(model)
            .filter(model.id == item_id, model.deleted.is_(False))
            .with_for_update()
            .first()
        )
        if row is None:
            raise NotFoundError(f"{entity.item_type} not found")

        snapshot = row_snapshot(row)

        row.mark_deleted(stamp, actor_user_id)
        db.flush()

        if entity.on_move is not None:
            entity.on_move(db, row, stamp)

        db.add(
            entity.trash_model(
                original_id=row.id,
                snapshot=snapshot,
                deleted_by=actor_user_id,
                reason=reason,
                deleted_at=stamp,
                retention_until=stamp + timedelta(days=days),
            )
        )

        append_trash_log(
            db,
            entity.item_type,
            row.id,
            "move",
            actor_user_id=actor_user_id,
            reason=reason,
            now=stamp,
        )

        logger.info(
            "Moved to trash",
            extra={"item_type": entity.item_type, "item_id": item_id, "actor_user_id": actor_user_id},
        )
        return {"ok": True}

    return database.with_transaction(_run)


def restore_from_trash(
    database: Database,
    entity: TrashableEntity,
    item_id: str,
    *,
    actor_user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    The live row is the source of truth; the snapshot is discarded even if
    the live row changed while it was in the trash.
    """
    model = entity.model
    trash_model = entity.trash_model

    def _run(db: Session) -> dict[str, Any]:
        stamp = now or _utcnow()
        values = {model.deleted: False, model.deleted_at: None, model.deleted_by: None}
        if hasattr(model, "updated_at"):
            values[model.updated_at] = stamp
        db.query(model).filter(model.id == item_id).update(values, synchronize_session=False)

        if entity.on_restore is not None:
            row = db.query(model).filter(model.id == item_id).first()
            if row is not None:
                entity.on_restore(db, row, stamp)

        db.query(trash_model).filter(trash_model.original_id == item_id).delete(synchronize_session=False)

        append_trash_log(db, entity.item_type, item_id, "restore", actor_user_id=actor_user_id, now=stamp)

        logger.info(
            "Restored from trash",
            extra={"item_type": entity.item_type, "item_id": item_id, "actor_user_id": actor_user_id},
        )
        return {"ok": True}

    return database.with_transaction(_run)


def purge_from_trash(
    database: Database,
    entity: TrashableEntity,
    item_id: str,
    *,
    actor_user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    model = entity.model
    trash_model = entity.trash_model

    def _run(db: Session) -> dict[str, Any]:
        stamp = now or _utcnow()
        snapshots = (
            db.query(trash_model)
            .filter(trash_model.original_id == item_id)
            .delete(synchronize_session=False)
        )

        live_rows = 0
        if entity.purge_live_row:
            live_rows = db.query(model).filter(model.id == item_id).delete(synchronize_session=False)

        append_trash_log(db, entity.item_type, item_id, "purge", actor_user_id=actor_user_id, now=stamp)

        logger.info(
            "Purged from trash",
            extra={
                "item_type": entity.item_type,
                "item_id": item_id,
                "actor_user_id": actor_user_id,
                "snapshots": snapshots,
                "live_rows": live_rows,
            },
        )
        return {"ok": True}

    return database.with_transaction(_run)


def list_trash(database: Database, entity: TrashableEntity) -> list:
    trash_model = entity.trash_model
    db = database.session()
    try:
        return (
            db.query(trash_model)
            .order_by(trash_model.deleted_at.desc(), trash_model.id.asc())
            .all()
        )
    finally:
        db.close()


def list_trash_logs(database: Database, *, limit: int = TRASH_LOG_LIMIT) -> list[TrashLog]:
    db = database.session()
    try:
        return (
            db.query(TrashLog)
            .order_by(TrashLog.timestamp.desc(), TrashLog.id.desc())
            .limit(int(limit))
            .all()
        )
    finally:
        db.close()

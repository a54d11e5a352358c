"""
Project soft-delete / restore / purge cascade.

A project and its dependent records change state together inside one
transaction. Dependents:

    expenses, payments, materials, tasks, team_work_entries   (by project_id)
    supplier_payments                                         (by expense -> project)

Every row touched by one cascade is stamped with the same ``now``; restore in
``cascade`` scope relies on that to tell cascaded rows from ones deleted
independently beforehand.
"""
import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.database import Database
from app.models.expense import Expense
from app.models.material import Material
from app.models.payment import Payment
from app.models.project import Project
from app.models.quotation import Quotation
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.team import Team
from app.models.team_work_entry import TeamWorkEntry
from app.services.trash_service import append_trash_log

logger = logging.getLogger(__name__)

ITEM_TYPE = "project"

PROJECT_DEPENDENTS = (Expense, Payment, Material, Task, TeamWorkEntry)

RESTORE_SCOPE_ALL = "all"
RESTORE_SCOPE_CASCADE = "cascade"
RESTORE_SCOPES = (RESTORE_SCOPE_ALL, RESTORE_SCOPE_CASCADE)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def restore_scope() -> str:
    scope = os.getenv("RESTORE_SCOPE", RESTORE_SCOPE_ALL).strip().lower()
    if scope not in RESTORE_SCOPES:
        raise ValueError(f"RESTORE_SCOPE must be one of {RESTORE_SCOPES}, got {scope!r}")
    return scope


def _project_expense_ids(project_id: str):
    return select(Expense.id).where(Expense.project_id == project_id).scalar_subquery()


def _dependent_queries(db: Session, project_id: str):
    for model in PROJECT_DEPENDENTS:
        yield model, db.query(model).filter(model.project_id == project_id)
    yield SupplierPayment, db.query(SupplierPayment).filter(
        SupplierPayment.expense_id.in_(_project_expense_ids(project_id))
    )


def _get_project_for_update(db: Session, project_id: str, *, active_only: bool = False) -> Project:
    q = db.query(Project).filter(Project.id == project_id)
    if active_only:
        # an already-deleted project keeps the stamp its dependents carry
        q = q.filter(Project.deleted.is_(False))
    project = q.with_for_update().first()
    if project is None:
        raise NotFoundError("Project not found")
    return project


def mark_dependents_deleted(db: Session, project_id: str, now: datetime) -> dict[str, int]:
    """Soft-delete active dependents of a project. Already-deleted rows are left alone."""
    counts = {}
    for model, q in _dependent_queries(db, project_id):
        counts[model.__tablename__] = q.filter(model.deleted.is_(False)).update(
            {model.deleted: True, model.deleted_at: now},
            synchronize_session=False,
        )
    return counts


def mark_dependents_restored(
    db: Session,
    project_id: str,
    *,
    deleted_at: Optional[datetime] = None,
) -> dict[str, int]:
    """
    Restore deleted dependents of a project.

    With ``deleted_at`` only rows stamped at exactly that instant are restored;
    without it every deleted dependent comes back.
    """
    counts = {}
    for model, q in _dependent_queries(db, project_id):
        q = q.filter(model.deleted.is_(True))
        if deleted_at is not None:
            q = q.filter(model.deleted_at == deleted_at)
        counts[model.__tablename__] = q.update(
            {model.deleted: False, model.deleted_at: None},
            synchronize_session=False,
        )
    return counts


def _clear_team_assignments(db: Session, project_id: str) -> int:
    return (
        db.query(Team)
        .filter(Team.assigned_project_id == project_id)
        .update({Team.assigned_project_id: None}, synchronize_session=False)
    )


def _set_quotation_status(db: Session, quotation_id: Optional[str], status: str, now: datetime) -> None:
    if not quotation_id:
        return
    db.query(Quotation).filter(Quotation.id == quotation_id).update(
        {Quotation.status: status, Quotation.updated_at: now},
        synchronize_session=False,
    )


def soft_delete_project(
    database: Database,
    project_id: str,
    *,
    actor_user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    stamp = now or _utcnow()

    def _run(db: Session) -> dict[str, Any]:
        project = _get_project_for_update(db, project_id, active_only=True)
        project.mark_deleted(stamp, actor_user_id)
        db.flush()

        counts = mark_dependents_deleted(db, project_id, stamp)
        teams_cleared = _clear_team_assignments(db, project_id)
        # undo the conversion that created this project
        _set_quotation_status(db, project.quotation_id, "Approved", stamp)

        append_trash_log(db, ITEM_TYPE, project_id, "move", actor_user_id=actor_user_id, now=stamp)

        logger.info(
            "Project soft-deleted",
            extra={
                "project_id": project_id,
                "actor_user_id": actor_user_id,
                "dependents": counts,
                "teams_cleared": teams_cleared,
            },
        )
        return {"success": True, "id": project_id}

    return database.with_transaction(_run)


def restore_project(
    database: Database,
    project_id: str,
    *,
    actor_user_id: Optional[str] = None,
    scope: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Project:
    """
    Restore a soft-deleted project and its dependents.

    Team ``assigned_project_id`` pointers cleared by the soft-delete are not
    put back.
    """
    stamp = now or _utcnow()
    scope = scope or restore_scope()
    if scope not in RESTORE_SCOPES:
        raise ValueError(f"Unknown restore scope: {scope}")

    def _run(db: Session) -> Project:
        project = _get_project_for_update(db, project_id)
        cascade_stamp = project.deleted_at

        project.mark_restored()
        project.updated_at = stamp
        db.flush()

        if scope == RESTORE_SCOPE_CASCADE and cascade_stamp is not None:
            counts = mark_dependents_restored(db, project_id, deleted_at=cascade_stamp)
        else:
            counts = mark_dependents_restored(db, project_id)

        _set_quotation_status(db, project.quotation_id, "Converted", stamp)

        append_trash_log(db, ITEM_TYPE, project_id, "restore", actor_user_id=actor_user_id, now=stamp)

        db.flush()
        db.refresh(project)

        logger.info(
            "Project restored",
            extra={
                "project_id": project_id,
                "actor_user_id": actor_user_id,
                "scope": scope,
                "dependents": counts,
            },
        )
        return project

    return database.with_transaction(_run)


def purge_project(
    database: Database,
    project_id: str,
    *,
    actor_user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Physically delete a project and everything hanging off it. Irreversible."""
    stamp = now or _utcnow()

    def _run(db: Session) -> dict[str, Any]:
        counts = {
            SupplierPayment.__tablename__: db.query(SupplierPayment)
            .filter(SupplierPayment.expense_id.in_(_project_expense_ids(project_id)))
            .delete(synchronize_session=False)
        }
        for model in PROJECT_DEPENDENTS:
            counts[model.__tablename__] = (
                db.query(model)
                .filter(model.project_id == project_id)
                .delete(synchronize_session=False)
            )

        removed = db.query(Project).filter(Project.id == project_id).delete(synchronize_session=False)

        append_trash_log(db, ITEM_TYPE, project_id, "purge", actor_user_id=actor_user_id, now=stamp)

        logger.info(
            "Project purged",
            extra={
                "project_id": project_id,
                "actor_user_id": actor_user_id,
                "project_rows": removed,
                "dependents": counts,
            },
        )
        return {"success": True}

    return database.with_transaction(_run)


def list_deleted_projects(database: Database) -> list[Project]:
    db = database.session()
    try:
        return (
            db.query(Project)
            .filter(Project.deleted.is_(True))
            .order_by(Project.deleted_at.desc(), Project.id.asc())
            .all()
        )
    finally:
        db.close()

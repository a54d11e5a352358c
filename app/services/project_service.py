from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.database import Database
from app.models.project import Project
from app.models.quotation import Quotation
from app.models.task import Task

STORED_STATUSES = ("Ongoing", "Completed", "Cancelled")

_DISPLAY_STATUS = {
    "Active": "Ongoing",
    "Ongoing": "Ongoing",
    "Planning": "Not Started",
    "On Hold": "On Hold",
    "Completed": "Completed",
    "Cancelled": "Cancelled",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_db_status(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    v = value.strip().lower()
    if v == "ongoing":
        return "Ongoing"
    if v == "completed":
        return "Completed"
    if v in {"cancelled", "canceled"}:
        return "Cancelled"
    return None


def from_db_status(value: Optional[str]) -> str:
    if not value:
        return "Ongoing"
    return _DISPLAY_STATUS.get(value, "Ongoing")


def normalize(value: Any) -> Any:
    if value == "":
        return None
    return value


def to_number(value: Any) -> Optional[Decimal]:
    value = normalize(value)
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


# patch field -> (columns written, value converter)
PROJECT_PATCH_COLUMNS: dict[str, tuple[tuple[str, ...], Callable[[Any], Any]]] = {
    "project_name": (("project_name",), normalize),
    "client_name": (("client_name",), normalize),
    "client_contact": (("client_contact",), normalize),
    "project_type": (("project_type",), normalize),
    "status": (("status",), to_db_status),
    "start_date": (("start_date",), normalize),
    "deadline": (("deadline", "end_date"), normalize),
    "project_amount": (("project_amount",), to_number),
    "expected_profit_percentage": (("expected_profit_percentage",), to_number),
}


def build_project_update(patch: dict[str, Any]) -> dict[str, Any]:
    """
    Map a sparse patch (only supplied fields) to column values.

    Unknown fields are ignored. Returns an empty dict when nothing applies.
    """
    values: dict[str, Any] = {}
    for field, raw in patch.items():
        mapping = PROJECT_PATCH_COLUMNS.get(field)
        if mapping is None:
            continue
        columns, convert = mapping
        converted = convert(raw)
        for column in columns:
            values[column] = converted
    return values


def list_projects(database: Database) -> list[tuple[Project, int, int]]:
    db = database.session()
    try:
        total = func.count(Task.id)
        completed = func.count(Task.id).filter(Task.status == "Completed")
        rows = (
            db.query(Project, total, completed)
            .outerjoin(Task, and_(Task.project_id == Project.id, Task.deleted.is_(False)))
            .filter(Project.deleted.is_(False))
            .group_by(Project.id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )
        return [(p, int(t or 0), int(c or 0)) for p, t, c in rows]
    finally:
        db.close()


def get_project(database: Database, project_id: str) -> Project:
    db = database.session()
    try:
        project = db.query(Project).filter(Project.id == project_id).first()
        if project is None:
            raise NotFoundError("Project not found")
        return project
    finally:
        db.close()


def create_project(database: Database, data: dict[str, Any]) -> Project:
    values = build_project_update(data)
    values["created_by"] = normalize(data.get("created_by"))

    def _run(db: Session) -> Project:
        project = Project(**values)
        db.add(project)
        db.flush()
        db.refresh(project)
        return project

    return database.with_transaction(_run)


def update_project(database: Database, project_id: str, patch: dict[str, Any]) -> Project:
    values = build_project_update(patch)
    if not values:
        raise ValueError("No valid fields provided to update")
    values["updated_at"] = _utcnow()

    def _run(db: Session) -> Project:
        updated = (
            db.query(Project)
            .filter(Project.id == project_id)
            .update(values, synchronize_session=False)
        )
        if not updated:
            raise NotFoundError("Project not found")
        return db.query(Project).filter(Project.id == project_id).one()

    return database.with_transaction(_run)


def convert_quotation(
    database: Database,
    quotation_id: str,
    *,
    actor_user_id: Optional[str] = None,
) -> Project:
    """Create a project from a quotation and mark the quotation Converted."""

    def _run(db: Session) -> Project:
        stamp = _utcnow()
        quotation = (
            db.query(Quotation)
            .filter(Quotation.id == quotation_id, Quotation.deleted.is_(False))
            .with_for_update()
            .first()
        )
        if quotation is None:
            raise NotFoundError("Quotation not found")

        project = Project(
            project_name=quotation.project_name,
            client_name=quotation.client_name,
            client_contact=quotation.client_contact or "",
            project_type="Other",
            project_amount=quotation.total,
            status="Ongoing",
            start_date=stamp.date(),
            created_by=actor_user_id,
            quotation_id=quotation.id,
        )
        db.add(project)

        quotation.status = "Converted"
        quotation.updated_at = stamp

        db.flush()
        db.refresh(project)
        return project

    return database.with_transaction(_run)

from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import NotFoundError
from app.models.expense import Expense
from app.models.material import Material
from app.models.payment import Payment
from app.models.project import Project
from app.models.quotation import Quotation
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.team import Team
from app.models.team_work_entry import TeamWorkEntry
from app.models.trash import TrashLog
from app.services import project_cascade

DEPENDENT_KEYS = {
    "expense": Expense,
    "payment": Payment,
    "material": Material,
    "task": Task,
    "work_entry": TeamWorkEntry,
    "supplier_payment": SupplierPayment,
}


def _get(database, model, row_id):
    db = database.session()
    try:
        return db.query(model).filter(model.id == row_id).one()
    finally:
        db.close()


def test_soft_delete_flags_project_and_every_dependent_with_one_stamp(database, project_with_dependents):
    rows = project_with_dependents()
    project = rows["project"]
    now = datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)

    result = project_cascade.soft_delete_project(database, project.id, actor_user_id="u1", now=now)

    assert result == {"success": True, "id": project.id}

    stored = _get(database, Project, project.id)
    assert stored.deleted is True
    assert stored.deleted_at == now
    assert stored.deleted_by == "u1"

    for key, model in DEPENDENT_KEYS.items():
        dep = _get(database, model, rows[key].id)
        assert dep.deleted is True, key
        assert dep.deleted_at == now, key


def test_soft_delete_leaves_other_projects_untouched(database, project_with_dependents):
    target = project_with_dependents()
    other = project_with_dependents(project_name="Office fit-out")

    project_cascade.soft_delete_project(database, target["project"].id)

    assert _get(database, Project, other["project"].id).deleted is False
    for key, model in DEPENDENT_KEYS.items():
        assert _get(database, model, other[key].id).deleted is False, key


def test_soft_delete_clears_team_assignment_and_reverts_quotation(
    database, project_factory, quotation_factory, team_factory
):
    quotation = quotation_factory(status="Converted")
    project = project_factory(quotation_id=quotation.id)
    team = team_factory(assigned_project_id=project.id)
    other_team = team_factory(name="Painters")

    project_cascade.soft_delete_project(database, project.id)

    assert _get(database, Team, team.id).assigned_project_id is None
    assert _get(database, Team, other_team.id).assigned_project_id is None
    assert _get(database, Quotation, quotation.id).status == "Approved"


def test_soft_delete_does_not_restamp_already_deleted_dependents(
    database, project_factory, expense_factory
):
    project = project_factory()
    earlier = datetime(2026, 9, 1, tzinfo=timezone.utc)
    pre_deleted = expense_factory(project.id, deleted=True, deleted_at=earlier)
    active = expense_factory(project.id, title="Hinges")

    project_cascade.soft_delete_project(database, project.id)

    assert _get(database, Expense, pre_deleted.id).deleted_at == earlier
    assert _get(database, Expense, active.id).deleted_at != earlier


def test_dependent_soft_delete_step_is_idempotent(database, project_with_dependents):
    rows = project_with_dependents()
    project_id = rows["project"].id

    project_cascade.soft_delete_project(database, project_id)
    first_stamp = _get(database, Expense, rows["expense"].id).deleted_at

    later = first_stamp + timedelta(hours=3)
    counts = database.with_transaction(
        lambda db: project_cascade.mark_dependents_deleted(db, project_id, later)
    )

    assert set(counts.values()) == {0}
    for key, model in DEPENDENT_KEYS.items():
        assert _get(database, model, rows[key].id).deleted_at == first_stamp, key


def test_soft_delete_rolls_back_everything_on_failure(database, project_with_dependents, quotation_factory, monkeypatch):
    quotation = quotation_factory(status="Converted")
    rows = project_with_dependents(quotation_id=quotation.id)

    def _explode(*_args, **_kwargs):
        raise RuntimeError("quotation table unavailable")

    monkeypatch.setattr(project_cascade, "_set_quotation_status", _explode)

    with pytest.raises(RuntimeError):
        project_cascade.soft_delete_project(database, rows["project"].id)

    project = _get(database, Project, rows["project"].id)
    assert project.deleted is False
    assert project.deleted_at is None
    for key, model in DEPENDENT_KEYS.items():
        dep = _get(database, model, rows[key].id)
        assert dep.deleted is False, key
        assert dep.deleted_at is None, key

    db = database.session()
    try:
        assert db.query(TrashLog).count() == 0
    finally:
        db.close()


def test_soft_delete_missing_project_raises_not_found(database):
    with pytest.raises(NotFoundError):
        project_cascade.soft_delete_project(database, "does-not-exist")


def test_soft_delete_appends_move_log(database, project_factory):
    project = project_factory()

    project_cascade.soft_delete_project(database, project.id, actor_user_id="u7")

    db = database.session()
    try:
        logs = db.query(TrashLog).all()
    finally:
        db.close()

    assert len(logs) == 1
    assert (logs[0].item_type, logs[0].item_id, logs[0].action, logs[0].actor_user_id) == (
        "project",
        project.id,
        "move",
        "u7",
    )


def test_delete_endpoint_returns_success_and_hides_project(client, project_with_dependents):
    rows = project_with_dependents()
    project_id = rows["project"].id

    resp = client.delete(f"/projects/{project_id}")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "id": project_id}

    listing = client.get("/projects")
    assert listing.status_code == 200
    assert all(p["id"] != project_id for p in listing.json())

    trash = client.get("/trash/projects")
    assert trash.status_code == 200
    assert [p["id"] for p in trash.json()] == [project_id]
    assert trash.json()[0]["deleted"] is True


def test_delete_endpoint_missing_project_is_404(client):
    resp = client.delete("/projects/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Failed to delete project"
    assert body["details"] == "Project not found"


def test_delete_endpoint_unexpected_failure_is_500(client, project_factory, monkeypatch):
    project = project_factory()

    def _explode(*_args, **_kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(project_cascade, "_clear_team_assignments", _explode)

    resp = client.delete(f"/projects/{project.id}")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to delete project"
    assert "details" in body

    assert client.get(f"/projects/{project.id}").json()["deleted"] is False


def test_second_soft_delete_is_not_found_and_keeps_first_stamp(
    database, project_with_dependents, quotation_factory
):
    quotation = quotation_factory(status="Converted")
    rows = project_with_dependents(quotation_id=quotation.id)
    project_id = rows["project"].id
    first = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
    second = datetime(2026, 10, 2, 9, 0, tzinfo=timezone.utc)

    project_cascade.soft_delete_project(database, project_id, actor_user_id="u1", now=first)

    with pytest.raises(NotFoundError):
        project_cascade.soft_delete_project(database, project_id, actor_user_id="u2", now=second)

    stored = _get(database, Project, project_id)
    assert stored.deleted_at == first
    assert stored.deleted_by == "u1"

    db = database.session()
    try:
        assert db.query(TrashLog).filter(TrashLog.action == "move").count() == 1
    finally:
        db.close()

    project_cascade.restore_project(
        database, project_id, scope=project_cascade.RESTORE_SCOPE_CASCADE, now=second
    )

    assert _get(database, Project, project_id).deleted is False
    for key, model in DEPENDENT_KEYS.items():
        assert _get(database, model, rows[key].id).deleted is False, key
    assert _get(database, Quotation, quotation.id).status == "Converted"


def test_delete_endpoint_twice_is_404(client, project_factory):
    project = project_factory()

    assert client.delete(f"/projects/{project.id}").status_code == 200

    resp = client.delete(f"/projects/{project.id}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Failed to delete project"

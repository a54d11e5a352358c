from decimal import Decimal

import pytest

from app.core.errors import NotFoundError
from app.models.expense import Expense
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.trash import SupplierPaymentTrash, TaskTrash, TrashLog
from app.services import trash_service
from app.services.trash_service import SUPPLIER_PAYMENTS, TASKS


def _get(database, model, row_id):
    db = database.session()
    try:
        return db.query(model).filter(model.id == row_id).first()
    finally:
        db.close()


def _count(database, model):
    db = database.session()
    try:
        return db.query(model).count()
    finally:
        db.close()


@pytest.fixture
def paid_expense(project_factory, expense_factory, supplier_payment_factory):
    """An expense of 20000 settled by two supplier payments (15000 + 5000)."""
    project = project_factory()
    expense = expense_factory(project.id, amount=Decimal("20000"), payment_status="Paid")
    big = supplier_payment_factory(expense.id, amount=Decimal("15000"))
    small = supplier_payment_factory(expense.id, amount=Decimal("5000"), supplier_id="supplier-2")
    return {"project": project, "expense": expense, "big": big, "small": small}


def test_task_move_restore_and_purge(database, project_factory, task_factory):
    project = project_factory()
    task = task_factory(project.id, title="Install false ceiling")

    trash_service.move_to_trash(database, TASKS, task.id, reason="duplicate", actor_user_id="u1")

    trashed = _get(database, Task, task.id)
    assert trashed.deleted is True
    assert trashed.deleted_by == "u1"
    (snap,) = trash_service.list_trash(database, TASKS)
    assert snap.original_id == task.id
    assert snap.snapshot["title"] == "Install false ceiling"
    assert snap.reason == "duplicate"

    trash_service.restore_from_trash(database, TASKS, task.id)
    restored = _get(database, Task, task.id)
    assert restored.deleted is False
    assert restored.deleted_by is None
    assert restored.updated_at is not None
    assert _count(database, TaskTrash) == 0

    trash_service.move_to_trash(database, TASKS, task.id)
    trash_service.purge_from_trash(database, TASKS, task.id)
    assert _get(database, Task, task.id) is None
    assert _count(database, TaskTrash) == 0


def test_task_move_of_trashed_task_is_not_found(database, project_factory, task_factory):
    task = task_factory(project_factory().id)
    trash_service.move_to_trash(database, TASKS, task.id)

    with pytest.raises(NotFoundError):
        trash_service.move_to_trash(database, TASKS, task.id)


def test_trashing_a_payment_marks_expense_unpaid(database, paid_expense):
    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, paid_expense["small"].id, actor_user_id="u1")

    expense = _get(database, Expense, paid_expense["expense"].id)
    assert expense.payment_status == "Unpaid"
    assert expense.updated_at is not None

    payment = _get(database, SupplierPayment, paid_expense["small"].id)
    assert payment.deleted is True
    assert payment.deleted_by == "u1"

    (snap,) = trash_service.list_trash(database, SUPPLIER_PAYMENTS)
    assert snap.snapshot["amount"] == 5000.0
    assert snap.snapshot["expense_id"] == paid_expense["expense"].id


def test_restoring_a_payment_marks_expense_paid_again(database, paid_expense):
    payment_id = paid_expense["small"].id
    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, payment_id)

    trash_service.restore_from_trash(database, SUPPLIER_PAYMENTS, payment_id)

    assert _get(database, Expense, paid_expense["expense"].id).payment_status == "Paid"
    assert _get(database, SupplierPayment, payment_id).deleted is False
    assert _count(database, SupplierPaymentTrash) == 0


def test_restore_links_supplier_only_when_expense_has_none(database, paid_expense):
    expense_id = paid_expense["expense"].id
    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, paid_expense["small"].id)
    trash_service.restore_from_trash(database, SUPPLIER_PAYMENTS, paid_expense["small"].id)

    assert _get(database, Expense, expense_id).supplier_id == "supplier-2"

    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, paid_expense["big"].id)
    trash_service.restore_from_trash(database, SUPPLIER_PAYMENTS, paid_expense["big"].id)

    # existing link wins over the restored payment's supplier
    assert _get(database, Expense, expense_id).supplier_id == "supplier-2"


def test_unlinked_payment_round_trip_leaves_expenses_alone(
    database, project_factory, expense_factory, supplier_payment_factory
):
    expense = expense_factory(project_factory().id, payment_status="Paid")
    payment = supplier_payment_factory(None)

    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, payment.id)
    trash_service.restore_from_trash(database, SUPPLIER_PAYMENTS, payment.id)

    stored = _get(database, Expense, expense.id)
    assert stored.payment_status == "Paid"
    assert stored.updated_at is None


def test_payment_move_rolls_back_with_expense_status(database, paid_expense, monkeypatch):
    def _explode(*_args, **_kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(trash_service, "append_trash_log", _explode)

    with pytest.raises(RuntimeError):
        trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, paid_expense["small"].id)

    assert _get(database, Expense, paid_expense["expense"].id).payment_status == "Paid"
    assert _get(database, SupplierPayment, paid_expense["small"].id).deleted is False


def test_payment_purge_removes_row_and_logs(database, paid_expense):
    payment_id = paid_expense["small"].id
    trash_service.move_to_trash(database, SUPPLIER_PAYMENTS, payment_id)

    trash_service.purge_from_trash(database, SUPPLIER_PAYMENTS, payment_id, actor_user_id="u9")

    assert _get(database, SupplierPayment, payment_id) is None
    assert _count(database, SupplierPaymentTrash) == 0

    db = database.session()
    try:
        actions = [
            log.action
            for log in db.query(TrashLog)
            .filter(TrashLog.item_type == "supplier_payment", TrashLog.item_id == payment_id)
            .order_by(TrashLog.id.asc())
        ]
    finally:
        db.close()
    assert actions == ["move", "purge"]


def test_task_api_flow(client, project_factory, task_factory):
    task = task_factory(project_factory().id)

    resp = client.request("DELETE", f"/tasks/{task.id}", json={"reason": "scope cut", "actorUserId": "pm-1"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    body = client.get(f"/tasks/{task.id}").json()
    assert body["deleted"] is True
    assert body["deletedBy"] == "pm-1"

    trash = client.get("/trash/tasks").json()
    assert [t["originalId"] for t in trash] == [task.id]

    assert client.post(f"/tasks/{task.id}/restore").json() == {"ok": True}
    assert client.get("/trash/tasks").json() == []

    client.delete(f"/tasks/{task.id}")
    assert client.delete(f"/trash/tasks/{task.id}").status_code == 200
    assert client.get(f"/tasks/{task.id}").status_code == 404


def test_task_api_delete_missing_is_404(client):
    resp = client.delete("/tasks/missing")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Failed to delete task"


def test_supplier_payment_api_flow(client, paid_expense, auth_headers):
    payment_id = paid_expense["big"].id

    resp = client.delete(f"/supplier-payments/{payment_id}", headers=auth_headers("accounts-1"))
    assert resp.status_code == 200

    body = client.get(f"/supplier-payments/{payment_id}").json()
    assert body["deleted"] is True
    assert body["deletedBy"] == "accounts-1"
    assert body["amount"] == 15000

    trash = client.get("/trash/supplier-payments").json()
    assert trash[0]["originalId"] == payment_id
    assert trash[0]["deletedBy"] == "accounts-1"

    assert client.post(f"/supplier-payments/{payment_id}/restore").status_code == 200
    assert client.get(f"/supplier-payments/{payment_id}").json()["deleted"] is False

    client.delete(f"/supplier-payments/{payment_id}")
    assert client.delete(f"/trash/supplier-payments/{payment_id}").json() == {"ok": True}
    assert client.get(f"/supplier-payments/{payment_id}").status_code == 404

from datetime import date
from decimal import Decimal

import pytest

from app.services.project_service import build_project_update, from_db_status, to_db_status


def test_deadline_is_written_to_both_columns():
    values = build_project_update({"deadline": date(2026, 12, 31)})
    assert values == {"deadline": date(2026, 12, 31), "end_date": date(2026, 12, 31)}


def test_unknown_fields_are_ignored():
    assert build_project_update({"color": "red", "deleted": True}) == {}


def test_blank_strings_become_null():
    values = build_project_update({"client_contact": "", "project_amount": ""})
    assert values == {"client_contact": None, "project_amount": None}


def test_numbers_are_converted():
    values = build_project_update({"project_amount": "125000.50", "expected_profit_percentage": 12})
    assert values["project_amount"] == Decimal("125000.50")
    assert values["expected_profit_percentage"] == Decimal("12")


def test_non_numeric_amount_is_rejected():
    with pytest.raises(ValueError):
        build_project_update({"project_amount": "lots"})


@pytest.mark.parametrize(
    "raw, stored",
    [("ongoing", "Ongoing"), ("Completed", "Completed"), ("canceled", "Cancelled"), ("Planning", None)],
)
def test_status_normalized_for_storage(raw, stored):
    assert to_db_status(raw) == stored


@pytest.mark.parametrize(
    "stored, shown",
    [("Active", "Ongoing"), ("Planning", "Not Started"), (None, "Ongoing"), ("Cancelled", "Cancelled")],
)
def test_status_mapped_for_display(stored, shown):
    assert from_db_status(stored) == shown


def test_put_updates_only_supplied_fields(client, project_factory):
    project = project_factory(client_contact="98450 00000")

    resp = client.put(
        f"/projects/{project.id}",
        json={"clientName": "S. Rao & Sons", "deadline": "2026-12-31", "status": "completed"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["clientName"] == "S. Rao & Sons"
    assert body["deadline"] == "2026-12-31"
    assert body["status"] == "Completed"
    assert body["clientContact"] == "98450 00000"
    assert body["projectName"] == project.project_name
    assert body["updatedAt"] is not None


def test_put_with_nothing_usable_is_400(client, project_factory):
    project = project_factory()

    resp = client.put(f"/projects/{project.id}", json={"unknown": 1})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No valid fields provided to update"}


def test_put_missing_project_is_404(client):
    resp = client.put("/projects/missing", json={"projectName": "X"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}


def test_create_and_list_with_task_counts(client, task_factory):
    resp = client.post(
        "/projects",
        json={"projectName": "Clinic reception", "projectAmount": "300000", "status": "ongoing"},
    )
    assert resp.status_code == 201
    project_id = resp.json()["id"]

    task_factory(project_id, status="Completed")
    task_factory(project_id, title="Order glass")
    task_factory(project_id, title="Old task", deleted=True)

    (listed,) = client.get("/projects").json()
    assert listed["id"] == project_id
    assert listed["projectAmount"] == 300000
    assert listed["totalTasks"] == 2
    assert listed["completedTasks"] == 1

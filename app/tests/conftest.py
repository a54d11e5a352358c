import os
_default_test_secret = "test-jwt-secret-for-pytest-only-0000000000000000"
if len(os.environ.get("JWT_SECRET", "")) < 32:
    os.environ["JWT_SECRET"] = _default_test_secret
os.environ.setdefault("ENV", "test")

import subprocess
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url

TEST_DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost/contractor_backoffice_test")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from app.database import Database
from app.main import create_app
from app.models.expense import Expense
from app.models.material import Material
from app.models.payment import Payment
from app.models.project import Project
from app.models.quotation import Quotation
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.team import Team, TeamMember
from app.models.team_work_entry import TeamWorkEntry
from app.services.financial_summary_service import utc_today


def _ensure_database_exists(database_url: str) -> None:
    url = make_url(database_url)

    if not url.drivername.startswith("postgresql"):
        return

    db_name = url.database
    admin_url = url.set(database="postgres")
    admin_engine = create_engine(admin_url, isolation_level="AUTOCOMMIT")

    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": db_name},
            ).scalar()
            if not exists:
                safe_db_name = db_name.replace('"', '""')
                conn.execute(text(f'CREATE DATABASE "{safe_db_name}"'))
    finally:
        admin_engine.dispose()


def _truncate_all(database: Database) -> None:
    with database.engine.begin() as conn:
        rows = conn.execute(
            text(
                """
                SELECT tablename
                FROM pg_tables
                WHERE schemaname = 'public'
                  AND tablename <> 'alembic_version'
                """
            )
        ).fetchall()

        table_names = [row[0] for row in rows]
        if table_names:
            quoted = ", ".join([f'"public"."{name}"' for name in table_names])
            conn.execute(text(f"TRUNCATE TABLE {quoted} RESTART IDENTITY CASCADE"))


@pytest.fixture(scope="session")
def database():
    _ensure_database_exists(TEST_DATABASE_URL)

    env = os.environ.copy()
    env["DATABASE_URL"] = TEST_DATABASE_URL

    subprocess.run(
        ["alembic", "upgrade", "head"],
        check=True,
        cwd=Path(__file__).resolve().parents[2],
        env=env,
    )

    db = Database(TEST_DATABASE_URL, pool_size=5)
    yield db
    db.dispose()


@pytest.fixture(scope="function", autouse=True)
def _truncate_tables_between_tests(database):
    _truncate_all(database)
    yield
    _truncate_all(database)


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    def _headers(user_id: str = "user-1") -> dict:
        resp = client.post("/auth/token", json={"user_id": user_id})
        assert resp.status_code == 200, f"token request failed: {resp.status_code} {resp.text}"
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _headers


def _insert(database: Database, model, **fields):
    db = database.session()
    try:
        row = model(**fields)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    finally:
        db.close()


@pytest.fixture
def quotation_factory(database):
    def _make(**overrides) -> Quotation:
        fields = {
            "project_name": "Villa kitchen",
            "client_name": "R. Mehta",
            "total": Decimal("250000"),
            "status": "Approved",
        }
        fields.update(overrides)
        return _insert(database, Quotation, **fields)

    return _make


@pytest.fixture
def project_factory(database):
    def _make(**overrides) -> Project:
        fields = {
            "project_name": "Apartment 4B interiors",
            "client_name": "S. Rao",
            "status": "Ongoing",
            "start_date": date(2026, 1, 5),
            "project_amount": Decimal("500000"),
        }
        fields.update(overrides)
        return _insert(database, Project, **fields)

    return _make


@pytest.fixture
def team_factory(database):
    def _make(**overrides) -> Team:
        fields = {"name": "Carpentry crew", "category": "Carpentry"}
        fields.update(overrides)
        return _insert(database, Team, **fields)

    return _make


@pytest.fixture
def team_member_factory(database):
    def _make(**overrides) -> TeamMember:
        fields = {
            "name": "Ravi",
            "contact": "+91 90000 00000",
            "skills": ["carpentry", "polish"],
            "employment_status": "Contractor",
            "rate_type": "Daily",
            "rate_amount": Decimal("1200"),
        }
        fields.update(overrides)
        return _insert(database, TeamMember, **fields)

    return _make


@pytest.fixture
def expense_factory(database):
    def _make(project_id: str, **overrides) -> Expense:
        fields = {
            "project_id": project_id,
            "title": "Plywood",
            "amount": Decimal("20000"),
            "expense_date": utc_today(),
        }
        fields.update(overrides)
        return _insert(database, Expense, **fields)

    return _make


@pytest.fixture
def payment_factory(database):
    def _make(project_id: str, **overrides) -> Payment:
        fields = {
            "project_id": project_id,
            "amount": Decimal("50000"),
            "payment_date": utc_today(),
            "payment_mode": "UPI",
        }
        fields.update(overrides)
        return _insert(database, Payment, **fields)

    return _make


@pytest.fixture
def material_factory(database):
    def _make(project_id: str, **overrides) -> Material:
        fields = {
            "project_id": project_id,
            "item_name": "Laminate sheet",
            "quantity": Decimal("10"),
            "unit": "sheet",
            "rate": Decimal("900"),
            "amount": Decimal("9000"),
        }
        fields.update(overrides)
        return _insert(database, Material, **fields)

    return _make


@pytest.fixture
def task_factory(database):
    def _make(project_id: str, **overrides) -> Task:
        fields = {"project_id": project_id, "title": "Measure site", "status": "Not Started"}
        fields.update(overrides)
        return _insert(database, Task, **fields)

    return _make


@pytest.fixture
def work_entry_factory(database, team_member_factory):
    def _make(project_id=None, **overrides) -> TeamWorkEntry:
        if "team_member_id" not in overrides:
            overrides["team_member_id"] = team_member_factory().id
        fields = {
            "project_id": project_id,
            "work_date": utc_today(),
            "task_name": "Wardrobe frame",
            "quantity": Decimal("1"),
            "rate": Decimal("1500"),
            "amount": Decimal("1500"),
        }
        fields.update(overrides)
        return _insert(database, TeamWorkEntry, **fields)

    return _make


@pytest.fixture
def supplier_payment_factory(database):
    def _make(expense_id: str, **overrides) -> SupplierPayment:
        fields = {
            "supplier_id": "supplier-1",
            "expense_id": expense_id,
            "amount": Decimal("15000"),
            "payment_mode": "Banking",
            "payment_date": utc_today(),
        }
        fields.update(overrides)
        return _insert(database, SupplierPayment, **fields)

    return _make


@pytest.fixture
def project_with_dependents(
    project_factory,
    expense_factory,
    payment_factory,
    material_factory,
    task_factory,
    work_entry_factory,
    supplier_payment_factory,
):
    """A project with one row in every dependent table."""

    def _make(**project_overrides) -> dict:
        project = project_factory(**project_overrides)
        expense = expense_factory(project.id)
        return {
            "project": project,
            "expense": expense,
            "payment": payment_factory(project.id),
            "material": material_factory(project.id),
            "task": task_factory(project.id),
            "work_entry": work_entry_factory(project.id),
            "supplier_payment": supplier_payment_factory(expense.id),
        }

    return _make

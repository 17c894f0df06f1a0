from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from farmrec.api import dashboard as dashboard_api
from farmrec.api import farmers as farmers_api
from farmrec.api import reports as reports_api
from farmrec.core import auth
from farmrec.core.auth import get_current_user
from farmrec.core.database import get_db
from farmrec.core.errors import DuplicateUsernameError
from farmrec.crud import farmers as crud_farmers
from farmrec.crud import users as crud_users
from farmrec.main import app
from farmrec.schemas.user import CurrentUser


ADMIN = CurrentUser(id="admin-1", username="root", role="admin")
ENCODER = CurrentUser(id="user-1", username="encoder", role="user")


async def _no_db():
    yield None


@pytest.fixture
def as_user():
    def _as(user):
        app.dependency_overrides[get_current_user] = lambda: user
    return _as


@pytest.fixture
def client(monkeypatch, as_user, reference):
    app.dependency_overrides[get_db] = _no_db
    as_user(ADMIN)
    for module in (farmers_api, dashboard_api, reports_api):
        monkeypatch.setattr(module, "today", lambda: reference)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def stored(monkeypatch, make_farmer):
    records = [
        make_farmer(-5, land_area=2.0, town="Tanauan"),
        make_farmer(2, land_area=1.0),
        make_farmer(10),
        make_farmer(None),
    ]

    async def fake_list(db):
        return records

    async def fake_get(db, farmer_id):
        return next((r for r in records if r["id"] == farmer_id), None)

    monkeypatch.setattr(crud_farmers, "list_farmers", fake_list)
    monkeypatch.setattr(crud_farmers, "get_farmer", fake_get)
    return records


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_requests_without_token_are_rejected():
    app.dependency_overrides.clear()
    response = TestClient(app).get("/farmers")
    assert response.status_code in (401, 403)


def test_list_and_filter_farmers(client, stored):
    assert len(client.get("/farmers").json()) == 4

    overdue = client.get("/farmers", params={"filter": "overdue"}).json()
    assert [f["id"] for f in overdue] == [stored[0]["id"]]

    searched = client.get("/farmers", params={"q": "tanauan"}).json()
    assert [f["id"] for f in searched] == [stored[0]["id"]]

    assert client.get("/farmers", params={"filter": "bogus"}).status_code == 400


def test_get_farmer_and_card(client, stored):
    assert client.get(f"/farmers/{stored[1]['id']}").json()["first_name"] == stored[1]["first_name"]
    assert client.get("/farmers/missing").status_code == 404

    card = client.get(f"/farmers/{stored[1]['id']}/card").json()
    assert card["status"] == "due-soon"
    assert card["label"] == "Due Soon"
    assert card["days"] == 2


def test_create_farmer_rejects_invalid_form_with_all_errors(client, monkeypatch):
    async def must_not_store(*args, **kwargs):
        raise AssertionError("invalid form reached storage")

    monkeypatch.setattr(crud_farmers, "create_farmer", must_not_store)

    response = client.post("/farmers", json={
        "first_name": "",
        "last_name": "Cruz",
        "barangay": "X",
        "town": "Y",
        "contact_number": "abc",
    })
    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == [
        "First name is required",
        "Invalid contact number format",
    ]


def test_create_farmer_stores_clean_values(client, monkeypatch):
    captured = {}

    async def fake_create(db, values, user_id=None):
        captured["values"] = values
        captured["user_id"] = user_id
        return SimpleNamespace(id="new-1", user_id=user_id, created_at=None, **values.model_dump())

    monkeypatch.setattr(crud_farmers, "create_farmer", fake_create)

    response = client.post("/farmers", json={
        "first_name": " Ana ",
        "last_name": "Reyes",
        "barangay": "Darasa",
        "town": "Tanauan",
        "land_area": "1.75",
        "planted_date": "2024-03-01",
        "harvest_date": "2024-06-20",
    })
    assert response.status_code == 201
    assert response.json()["id"] == "new-1"
    assert captured["values"].first_name == "Ana"
    assert captured["values"].land_area == 1.75
    assert captured["user_id"] == ADMIN.id


def test_validate_endpoint(client):
    body = client.post("/farmers/validate", json={"first_name": "A", "last_name": "B", "barangay": "C", "town": "D"}).json()
    assert body == {"is_valid": True, "errors": []}


def test_update_and_delete_missing_farmer(client, monkeypatch):
    async def none_update(db, farmer_id, values):
        return None

    async def none_delete(db, farmer_id):
        return False

    monkeypatch.setattr(crud_farmers, "update_farmer", none_update)
    monkeypatch.setattr(crud_farmers, "delete_farmer", none_delete)

    form = {"first_name": "A", "last_name": "B", "barangay": "C", "town": "D"}
    assert client.put("/farmers/nope", json=form).status_code == 404
    assert client.delete("/farmers/nope").status_code == 404


def test_dashboard_views(client, stored):
    summary = client.get("/dashboard/summary").json()
    assert summary == {
        "total_farmers": 4,
        "total_land_area": 3.0,
        "average_land_area": 0.75,
        "upcoming_harvests": 2,
        "overdue_harvests": 1,
    }

    status = client.get("/dashboard/status").json()
    assert status["counts"]["overdue"] == 1
    assert status["total"] == 3
    assert status["without_date"] == 1

    activity = client.get("/dashboard/recent-activity").json()
    assert [a["type"] for a in activity] == ["overdue", "upcoming"]

    notes = client.get("/dashboard/notifications").json()
    assert [n["type"] for n in notes] == ["overdue", "urgent"]

    calendar = client.get("/dashboard/calendar").json()
    assert [c["farmer_id"] for c in calendar] == [stored[1]["id"]]


def test_report_summary(client, stored):
    report = client.get("/reports/summary").json()
    assert report["by_town"] == {"San Jose": 3, "Tanauan": 1}
    assert [f["id"] for f in report["harvestable"]] == [stored[0]["id"], stored[1]["id"]]
    assert report["status_counts"]["total"] == 3

    land = client.get("/reports/land-area").json()
    assert land == {"total": 3.0, "average": 0.75}


def test_user_management_is_admin_only(client, as_user, monkeypatch, stored):
    async def fake_list(db):
        return [
            {"id": "admin-1", "username": "root", "role": "admin", "created_at": None},
            {"id": "user-1", "username": "encoder", "role": "user", "created_at": None},
        ]

    monkeypatch.setattr(crud_users, "list_users", fake_list)

    summary = client.get("/users/summary").json()
    assert summary["total"] == 2
    assert [u["username"] for u in summary["admins"]] == ["root"]

    as_user(ENCODER)
    assert client.get("/users").status_code == 403
    assert client.get("/users/summary").status_code == 403
    assert client.get("/dashboard/summary").status_code == 200


def test_create_user_validation_errors(client):
    response = client.post("/users", json={"username": "ab", "password": "123", "role": "user"})
    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == [
        "Username must be at least 3 characters",
        "Password must be at least 6 characters",
    ]


def test_admin_cannot_delete_own_account(client):
    response = client.delete(f"/users/{ADMIN.id}")
    assert response.status_code == 400


def test_me_returns_resolved_user(client, as_user):
    assert client.get("/auth/me").json() == {"id": "admin-1", "username": "root", "role": "admin"}
    as_user(ENCODER)
    assert client.get("/auth/me").json()["role"] == "user"


def test_signup_rejects_mismatched_passwords(client, monkeypatch):
    def must_not_register(email, password):
        raise AssertionError("invalid signup reached the auth provider")

    monkeypatch.setattr(auth, "supabase_admin_create_user", must_not_register)

    response = client.post("/auth/signup", json={
        "username": "new_user",
        "password": "secret1",
        "confirm_password": "secret2",
    })
    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == ["Passwords do not match"]


def test_signup_duplicate_username(client, monkeypatch):
    async def taken(db, username, user_id=None):
        raise DuplicateUsernameError(username)

    monkeypatch.setattr(crud_users, "ensure_username_free", taken)

    response = client.post("/auth/signup", json={
        "username": "encoder",
        "password": "secret1",
        "confirm_password": "secret1",
    })
    assert response.status_code == 409


def test_signup_creates_plain_user(client, monkeypatch):
    async def username_free(db, username, user_id=None):
        return None

    async def fake_create(db, user_id, username, role, auth_user_id=None):
        return SimpleNamespace(id=user_id, username=username, role=role, created_at=None)

    monkeypatch.setattr(crud_users, "ensure_username_free", username_free)
    monkeypatch.setattr(auth, "supabase_admin_create_user", lambda email, password: {"id": "auth-7"})
    monkeypatch.setattr(crud_users, "create_user", fake_create)

    response = client.post("/auth/signup", json={
        "username": "new_user",
        "password": "secret1",
        "confirm_password": "secret1",
    })
    assert response.status_code == 201
    assert response.json()["username"] == "new_user"
    assert response.json()["role"] == "user"

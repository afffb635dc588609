"""
End-to-end tests through the FastAPI app.
"""
import pytest
from fastapi.testclient import TestClient

from braketime.core.auth.schemas import UserLogin
from braketime.core.auth.service import AuthService
from braketime.main import app
from braketime.modules.admin.schemas import ManagerCreate


@pytest.fixture
def client(fake_backend, backend):
    fake_backend.seed(
        "users", id=1, username="admin", role="admin", manager_id=None,
        password=AuthService.get_password_hash("admin123")
    )
    fake_backend.seed(
        "users", id=2, username="bob", role="market_manager", manager_id=7,
        password=AuthService.get_password_hash("bobpass")
    )
    app.state.backend = backend
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password):
    response = client.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


class TestAuth:
    def test_admin_login_selects_admin_screen(self, client):
        response = client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin123"})

        data = response.json()
        assert data["session"]["kind"] == "admin"
        assert data["screen"] == "admin_dashboard"

    def test_wrong_password_is_rejected(self, client):
        response = client.post("/api/v1/auth/login", json={"username": "admin", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    def test_blank_credentials(self, client):
        response = client.post("/api/v1/auth/login", json={"username": " ", "password": ""})
        assert response.status_code == 400

    def test_me_without_token_shows_login(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.json()["screen"] == "login"

    def test_me_for_manager(self, client):
        response = client.get("/api/v1/auth/me", headers=login(client, "bob", "bobpass"))

        data = response.json()
        assert data["screen"] == "manager_dashboard"
        assert data["session"]["manager_id"] == 7


class TestAdminAccess:
    def test_requires_token(self, client):
        assert client.get("/api/v1/admin/dashboard").status_code == 401

    def test_manager_is_forbidden(self, client):
        response = client.get("/api/v1/admin/dashboard", headers=login(client, "bob", "bobpass"))
        assert response.status_code == 403


class TestAdminActions:
    def test_create_market_shows_on_dashboard(self, client):
        headers = login(client, "admin", "admin123")

        response = client.post("/api/v1/admin/markets", json={"name": "  North  "}, headers=headers)

        assert response.status_code == 200
        assert response.json()["notifications"][0]["severity"] == "success"
        dashboard = client.get("/api/v1/admin/dashboard", headers=headers).json()["dashboard"]
        assert [m["name"] for m in dashboard["markets"]] == ["North"]
        assert dashboard["counts"]["markets"] == 1

    def test_blank_market_name_is_rejected(self, client, fake_backend):
        headers = login(client, "admin", "admin123")

        response = client.post("/api/v1/admin/markets", json={"name": ""}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Please enter a market name"
        assert fake_backend.calls("POST", "markets") == []

    def test_delete_needs_confirmation(self, client, fake_backend):
        fake_backend.seed("stores", id=42, store_name="Main St", market_id=None, manager_id=None)
        headers = login(client, "admin", "admin123")

        response = client.delete("/api/v1/admin/stores/42", headers=headers)

        assert response.status_code == 409
        assert response.json()["confirmation"]["is_dangerous"] is True
        assert fake_backend.calls("DELETE") == []
        assert len(fake_backend.tables["stores"]) == 1

    def test_confirmed_delete(self, client, fake_backend):
        fake_backend.seed("stores", id=42, store_name="Main St", market_id=None, manager_id=None)
        fake_backend.seed("market_manager_stores", manager_id=7, store_id=42)
        headers = login(client, "admin", "admin123")

        response = client.delete("/api/v1/admin/stores/42?confirm=true", headers=headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Store deleted successfully!"
        assert fake_backend.tables["stores"] == []
        assert fake_backend.tables["market_manager_stores"] == []

    def test_dashboard_reports_backend_failure(self, client, fake_backend):
        headers = login(client, "admin", "admin123")
        fake_backend.fail("GET", "stores", message="stores unavailable")

        response = client.get("/api/v1/admin/dashboard", headers=headers)

        assert response.status_code == 502
        assert response.json()["message"] == "stores unavailable"


class TestManagerStores:
    def test_manager_sees_only_own_stores(self, client, fake_backend):
        fake_backend.seed("markets", id=1, name="North")
        fake_backend.seed("stores", id=42, store_name="Main St", market_id=1, manager_id=7)
        fake_backend.seed("stores", id=43, store_name="Side St", market_id=1, manager_id=8)

        response = client.get("/api/v1/manager/stores", headers=login(client, "bob", "bobpass"))

        data = response.json()
        assert data["total_stores"] == 1
        assert data["stores"][0]["store_name"] == "Main St"
        assert data["message"] == "You have access to 1 store"

    def test_admin_cannot_use_manager_view(self, client):
        response = client.get("/api/v1/manager/stores", headers=login(client, "admin", "admin123"))
        assert response.status_code == 403


class TestActionMessages:
    def test_success_message_survives_failed_reload(self, client, fake_backend):
        headers = login(client, "admin", "admin123")
        fake_backend.fail("GET", "stores", message="stores unavailable")

        response = client.post("/api/v1/admin/markets", json={"name": "North"}, headers=headers)

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is True
        assert data["message"] == "Market created successfully!"
        assert [n["message"] for n in data["notifications"]] == [
            "Market created successfully!",
            "stores unavailable",
        ]

    def test_manual_store_id_not_created_when_check_cannot_load(self, client, fake_backend):
        headers = login(client, "admin", "admin123")
        fake_backend.fail("GET", "stores", message="stores unavailable")

        response = client.post(
            "/api/v1/admin/stores",
            json={"store_name": "Main St", "store_id": 42},
            headers=headers
        )

        assert response.status_code == 502
        assert response.json()["message"] == "stores unavailable"
        assert fake_backend.calls("POST", "stores") == []


class TestRequestSchemas:
    def test_examples_are_declared_through_model_config(self):
        assert "Config" not in vars(UserLogin)
        assert "Config" not in vars(ManagerCreate)
        assert UserLogin.model_json_schema()["example"]["username"] == "admin"
        assert ManagerCreate.model_json_schema()["example"]["market_id"] == 1

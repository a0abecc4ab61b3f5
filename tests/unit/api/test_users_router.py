"""Tests for the /api/users endpoints."""

from fastapi.testclient import TestClient

from src.users_api.core.errors import StoreError
from src.users_api.entities.core.user import UserRepository
from src.users_api.runtime.config.config_data import (
    ApiConfig,
    AppConfig,
    ConfigData,
    DatabaseConfig,
    UsersConfig,
)
from tests.utils import post_user, user_payload

NO_TABLES = ConfigData(database=DatabaseConfig(create_tables=False))


def _failing_get(self, user_id):
    raise StoreError("re-fetch failed", sql="SELECT users.id FROM users")


class TestListUsers:
    def test_empty_store_returns_empty_array(self, client):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_created_users_in_insertion_order(self, client):
        post_user(client)
        post_user(client, email="c@d.co", name="Cid")

        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "email": "a@b.co", "name": "Ann"},
            {"id": 2, "email": "c@d.co", "name": "Cid"},
        ]

    def test_password_included_when_configured(self, app_factory):
        config = ConfigData(
            app=AppConfig(environment="test"),
            users=UsersConfig(list_includes_password=True),
        )
        with TestClient(app_factory(config=config)) as client:
            post_user(client)
            response = client.get("/api/users")

        assert response.json() == [
            {"id": 1, "email": "a@b.co", "password": "longenough", "name": "Ann"}
        ]

    def test_store_error_returns_message_and_sql(self, app_factory, empty_data_store):
        config = ConfigData(database=DatabaseConfig(create_tables=False))
        with TestClient(app_factory(config=config, store=empty_data_store)) as client:
            response = client.get("/api/users")

        assert response.status_code == 500
        body = response.json()
        assert "no such table" in body["error"]
        assert "FROM users" in body["sql"]

    def test_store_error_hides_sql_when_configured(self, app_factory, empty_data_store):
        config = ConfigData(
            database=DatabaseConfig(create_tables=False),
            api=ApiConfig(expose_sql_errors=False),
        )
        with TestClient(app_factory(config=config, store=empty_data_store)) as client:
            response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json()["sql"] is None


class TestCreateUser:
    def test_created_user_without_password(self, client):
        response = post_user(client)

        assert response.status_code == 201
        assert response.json() == {"id": 1, "email": "a@b.co", "name": "Ann"}

    def test_location_header_points_at_new_user(self, client):
        response = post_user(client)

        assert response.headers["Location"] == "http://testserver/api/users/1"

    def test_client_supplied_id_is_ignored(self, client):
        response = client.post("/api/users", json=user_payload(id=50))

        assert response.status_code == 201
        assert response.json()["id"] == 1

    def test_duplicate_email_conflict(self, client):
        post_user(client)

        response = post_user(client, name="Someone Else")

        assert response.status_code == 409
        assert response.json() == {"error": "Email already exists"}
        assert len(client.get("/api/users").json()) == 1

    def test_all_invalid_fields_listed(self, client):
        response = post_user(client, email="not-an-email", password="short", name="A")

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert [e["param"] for e in errors] == ["email", "password", "name"]
        assert errors[0] == {
            "value": "not-an-email",
            "msg": "Invalid email",
            "param": "email",
            "location": "body",
        }
        assert errors[1]["msg"] == "Password too short (8 characters min.)"
        assert errors[2]["msg"] == "Name too short (2 characters min.)"

    def test_single_invalid_field_listed(self, client):
        response = post_user(client, name="A")

        assert response.status_code == 422
        assert [e["param"] for e in response.json()["errors"]] == ["name"]

    def test_missing_fields_listed(self, client):
        response = client.post("/api/users", json={"email": "a@b.co"})

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert [e["param"] for e in errors] == ["password", "name"]
        assert all(e["value"] is None for e in errors)

    def test_missing_body(self, client):
        response = client.post("/api/users")

        assert response.status_code == 422
        assert response.json()["errors"][0]["location"] == "body"

    def test_invalid_input_never_reaches_store(self, client):
        post_user(client, email="bad", password="short", name="A")

        assert client.get("/api/users").json() == []

    def test_malformed_json_is_single_body_error(self, client):
        response = client.post(
            "/api/users",
            content=b'{"email": "a@b.co",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        [error] = response.json()["errors"]
        assert error["param"] == "body"
        assert error["location"] == "body"

    def test_email_with_trailing_newline_rejected(self, client):
        post_user(client)

        response = post_user(client, email="a@b.co\n")

        assert response.status_code == 422
        assert [e["param"] for e in response.json()["errors"]] == ["email"]
        assert len(client.get("/api/users").json()) == 1

    def test_store_error_returns_message_and_sql(self, app_factory, empty_data_store):
        with TestClient(app_factory(config=NO_TABLES, store=empty_data_store)) as client:
            response = post_user(client)

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error", "sql"}
        assert "no such table" in body["error"]
        assert body["sql"].startswith("INSERT INTO users")

    def test_failed_refetch_returns_store_error(self, client, monkeypatch):
        monkeypatch.setattr(UserRepository, "get", _failing_get)

        response = post_user(client)

        assert response.status_code == 500
        assert response.json() == {
            "error": "re-fetch failed",
            "sql": "SELECT users.id FROM users",
        }
        assert client.get("/api/users").json() == []


class TestUpdateUser:
    def test_updates_fields(self, client):
        post_user(client)

        response = client.put(
            "/api/users/1",
            json=user_payload(password="longenough2", name="Annie"),
        )

        assert response.status_code == 200
        assert response.json() == {"id": 1, "email": "a@b.co", "name": "Annie"}

    def test_location_header_is_resource_url(self, client):
        post_user(client)

        response = client.put("/api/users/1", json=user_payload(name="Annie"))

        assert response.headers["Location"] == "http://testserver/api/users/1"

    def test_missing_user_not_found(self, client):
        response = client.put("/api/users/999", json=user_payload())

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert client.get("/api/users").json() == []

    def test_email_of_other_user_conflicts(self, client):
        post_user(client)
        post_user(client, email="c@d.co", name="Cid")

        response = client.put("/api/users/2", json=user_payload(name="Cid"))

        assert response.status_code == 409
        assert response.json() == {"error": "Email already exists"}
        assert client.get("/api/users").json()[1]["email"] == "c@d.co"

    def test_invalid_fields_listed(self, client):
        post_user(client)

        response = client.put(
            "/api/users/1", json=user_payload(email="nope", password="short")
        )

        assert response.status_code == 422
        assert [e["param"] for e in response.json()["errors"]] == ["email", "password"]
        assert client.get("/api/users").json()[0]["email"] == "a@b.co"

    def test_non_integer_id(self, client):
        response = client.put("/api/users/abc", json=user_payload())

        assert response.status_code == 422
        [error] = response.json()["errors"]
        assert error["param"] == "user_id"
        assert error["location"] == "path"

    def test_store_error_returns_message_and_sql(self, app_factory, empty_data_store):
        with TestClient(app_factory(config=NO_TABLES, store=empty_data_store)) as client:
            response = client.put("/api/users/1", json=user_payload())

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error", "sql"}
        assert "no such table" in body["error"]
        assert body["sql"].startswith("UPDATE users")

    def test_failed_refetch_returns_store_error(self, client, monkeypatch):
        post_user(client)
        monkeypatch.setattr(UserRepository, "get", _failing_get)

        response = client.put("/api/users/1", json=user_payload(name="Annie"))

        assert response.status_code == 500
        assert response.json() == {
            "error": "re-fetch failed",
            "sql": "SELECT users.id FROM users",
        }
        assert client.get("/api/users").json()[0]["name"] == "Ann"

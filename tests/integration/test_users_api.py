"""End-to-end scenarios against a file-backed SQLite database."""

import pytest
from fastapi.testclient import TestClient

from src.users_api.api.http.app import create_app
from src.users_api.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
)
from tests.utils import post_user, user_payload


@pytest.fixture
def file_config(tmp_path) -> ConfigData:
    return ConfigData(
        app=AppConfig(environment="test"),
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'users.db'}"),
        logging=LoggingConfig(level="WARNING"),
    )


@pytest.fixture
def api(file_config):
    """Application that builds and owns its data store."""
    with TestClient(create_app(config=file_config)) as client:
        yield client


def test_user_lifecycle(api):
    created = post_user(api)
    assert created.status_code == 201
    assert created.json() == {"id": 1, "email": "a@b.co", "name": "Ann"}
    assert created.headers["Location"] == "http://testserver/api/users/1"

    duplicate = post_user(api, name="Other")
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Email already exists"}

    updated = api.put("/api/users/1", json=user_payload(name="Annie"))
    assert updated.status_code == 200
    assert updated.json() == {"id": 1, "email": "a@b.co", "name": "Annie"}

    listed = api.get("/api/users")
    assert listed.json() == [{"id": 1, "email": "a@b.co", "name": "Annie"}]

    missing = api.put("/api/users/999", json=user_payload(email="z@y.co"))
    assert missing.status_code == 404


def test_data_survives_restart(file_config):
    with TestClient(create_app(config=file_config)) as client:
        post_user(client)

    with TestClient(create_app(config=file_config)) as client:
        response = client.get("/api/users")

    assert [user["email"] for user in response.json()] == ["a@b.co"]


def test_ids_increase_for_each_user(api):
    post_user(api)
    post_user(api, email="c@d.co")

    third = post_user(api, email="e@f.co")

    assert third.json()["id"] == 3
    assert third.headers["Location"].endswith("/api/users/3")


def test_non_atomic_writes_behave_the_same(file_config):
    config = file_config.model_copy(
        update={"database": DatabaseConfig(url=file_config.database.url, atomic_writes=False)}
    )
    with TestClient(create_app(config=config)) as client:
        assert post_user(client).status_code == 201
        assert post_user(client).status_code == 409
        response = client.put("/api/users/1", json=user_payload(name="Annie"))

    assert response.json()["name"] == "Annie"

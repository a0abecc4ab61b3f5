from typing import Any

from fastapi.testclient import TestClient
from httpx import Response


def user_payload(**overrides: Any) -> dict[str, Any]:
    payload = {"email": "a@b.co", "password": "longenough", "name": "Ann"}
    payload.update(overrides)
    return payload


def post_user(client: TestClient, **overrides: Any) -> Response:
    return client.post("/api/users", json=user_payload(**overrides))

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from starlette.websockets import WebSocketDisconnect

from app.core.auth import create_access_token

from app.core.security import hash_password
from app.models.user import UserInDB, UserRole


def _stored_user(password: str) -> UserInDB:
    now = datetime.now(timezone.utc)
    return UserInDB(
        id=ObjectId("507f1f77bcf86cd799439011"),
        username="reception1",
        full_name="Front Desk",
        role=UserRole.RECEPTIONIST,
        password_hash=hash_password(password),
        created_at=now,
        updated_at=now
    )


def test_login_returns_token(client):
    with patch(
        "app.repositories.user_repo.UserRepository.get_user_by_username",
        new_callable=AsyncMock
    ) as mock_get:
        mock_get.return_value = _stored_user("secret123")

        response = client.post(
            "/api/v1/auth/login",
            json={"username": "Reception1", "password": "secret123"}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["id"] == "507f1f77bcf86cd799439011"
    assert data["user"]["role"] == "receptionist"


def test_login_wrong_password(client):
    with patch(
        "app.repositories.user_repo.UserRepository.get_user_by_username",
        new_callable=AsyncMock
    ) as mock_get:
        mock_get.return_value = _stored_user("secret123")

        response = client.post(
            "/api/v1/auth/login",
            json={"username": "reception1", "password": "wrong"}
        )

    assert response.status_code == 401


def test_me(client, receptionist):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 200
    assert response.json()["username"] == receptionist.username


def test_create_user_requires_admin(client, receptionist):
    response = client.post(
        "/api/v1/users/",
        json={"username": "newuser", "full_name": "New", "password": "secret123"}
    )

    assert response.status_code == 403


def test_reports_forbidden_for_doctor(client, doctor_user):
    response = client.get("/api/v1/reports/dashboard")

    assert response.status_code == 403


def test_admin_deletes_user(client, admin_user, mock_db):
    mock_db["users"].update_one = AsyncMock(return_value=MagicMock(modified_count=1))

    response = client.delete("/api/v1/users/65f0c0ffee0000000000a002")

    assert response.status_code == 204
    query, _ = mock_db["users"].update_one.await_args.args
    assert query["_id"] == ObjectId("65f0c0ffee0000000000a002")


def test_delete_unknown_user(client, admin_user, mock_db):
    mock_db["users"].update_one = AsyncMock(return_value=MagicMock(modified_count=0))

    response = client.delete("/api/v1/users/65f0c0ffee0000000000a002")

    assert response.status_code == 404


def test_admin_cannot_delete_self(client, admin_user):
    response = client.delete(f"/api/v1/users/{admin_user.id}")

    assert response.status_code == 400


def test_delete_user_requires_admin(client, receptionist):
    response = client.delete("/api/v1/users/65f0c0ffee0000000000a002")

    assert response.status_code == 403


def test_deleted_user_token_is_rejected(client, mock_db):
    token = create_access_token("507f1f77bcf86cd799439011", "receptionist")
    mock_db["users"].find_one.return_value = None  # soft-deleted users are filtered out

    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_ledger_stream_rejects_deleted_user(client, mock_db):
    token = create_access_token("507f1f77bcf86cd799439011", "receptionist")
    mock_db["users"].find_one.return_value = None

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(f"/api/v1/ledger/stream?token={token}") as ws:
            ws.receive_json()

    assert exc_info.value.code == 1008
    query = mock_db["users"].find_one.await_args.args[0]
    assert query == {"_id": ObjectId("507f1f77bcf86cd799439011"), "is_deleted": False}

"""Tests for Authentication."""
import pytest
from httpx import AsyncClient

from app.core.security import create_access_token, decode_access_token
from app.db.models import User


@pytest.mark.asyncio
async def test_register_creates_user(client: AsyncClient, db):
    response = await client.post(
        "/auth/register",
        json={"name": "Ana", "email": "Ana@Corp.com", "password": "secret1"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Register success"
    assert body["data"]["email"] == "ana@corp.com"
    assert "password" not in body["data"]
    assert "password_hash" not in body["data"]

    user = db.query(User).filter(User.email == "ana@corp.com").one()
    assert user.password_hash != "secret1"


@pytest.mark.asyncio
async def test_register_rejects_taken_email(client: AsyncClient, make_user):
    make_user("taken@corp.com")
    response = await client.post(
        "/auth/register",
        json={"name": "Dup", "email": "taken@corp.com", "password": "secret1"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Invalid field"
    assert body["errors"]["email"] == ["The email has already been taken."]


@pytest.mark.asyncio
async def test_register_validates_fields(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"name": "Ana", "email": "not-an-email", "password": "abc"},
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert "email" in errors
    assert errors["password"] == ["The password field must be at least 5 characters."]


@pytest.mark.asyncio
async def test_login_returns_token(client: AsyncClient, make_user):
    user = make_user("user1@webtech.id", name="user1", password="password1")
    response = await client.post(
        "/auth/login",
        json={"email": "user1@webtech.id", "password": "password1"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login success"
    assert body["user"]["name"] == "user1"
    assert body["user"]["email"] == "user1@webtech.id"

    payload = decode_access_token(body["user"]["accessToken"])
    assert payload["sub"] == str(user.id)


@pytest.mark.asyncio
async def test_login_rejects_wrong_password(client: AsyncClient, make_user):
    make_user("user1@webtech.id", password="password1")
    response = await client.post(
        "/auth/login",
        json={"email": "user1@webtech.id", "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Email or password incorrect"}


@pytest.mark.asyncio
async def test_login_rejects_unknown_email(client: AsyncClient):
    response = await client.post(
        "/auth/login",
        json={"email": "ghost@webtech.id", "password": "password1"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_protected_endpoint_requires_token(client: AsyncClient):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthenticated."}

    response = await client.get("/forms", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401

    response = await client.get("/forms", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_user(authed_client: AsyncClient, owner):
    response = await authed_client.get("/auth/me")
    assert response.status_code == 200
    assert response.json() == {"id": owner.id, "name": owner.name, "email": owner.email}


@pytest.mark.asyncio
async def test_logout_revokes_existing_tokens(client: AsyncClient, owner, auth_for):
    auth = auth_for(owner)

    response = await client.post("/auth/logout", headers=auth.headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Logout success"}

    response = await client.get("/auth/me", headers=auth.headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_rejected(client: AsyncClient):
    token = create_access_token(user_id=9999, token_version=1)
    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_previous_secret_still_verifies(monkeypatch):
    from app.core.config import settings

    old_token = create_access_token(user_id=1, token_version=1)
    monkeypatch.setattr(settings, "JWT_SECRET_PREVIOUS", settings.JWT_SECRET)
    monkeypatch.setattr(settings, "JWT_SECRET", "rotated-secret-for-formbuilder-api-9876543210")

    assert decode_access_token(old_token)["sub"] == "1"

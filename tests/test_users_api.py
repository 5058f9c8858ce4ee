"""
User and auth API tests - registration, login and bearer credential checks.
"""

import json
import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient

from farm_registry.core.security import create_access_token
from farm_registry.db.repositories import AccessTokenRepository, UserRepository
from tests.factories import ADDRESSES, create_farm, issue_token


@pytest.mark.asyncio
async def test_register_geocodes_address(client: AsyncClient, session, geocoder):
    response = await client.post(
        "/api/v1/users",
        json={"email": "new@example.com", "password": "secret", "address": "New York"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["address"] == "New York"
    assert "hashedPassword" not in data and "password" not in data
    assert geocoder.calls == ["New York"]

    user = await UserRepository(session).get_by_id(uuid.UUID(data["id"]))
    assert user.coordinates == ADDRESSES["New York"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    response = await client.post(
        "/api/v1/users",
        json={"email": test_user.email, "password": "secret", "address": "Szeged"},
    )
    assert response.status_code == 422
    assert response.json()["name"] == "UnprocessableEntityError"


@pytest.mark.asyncio
async def test_register_with_unknown_address(client: AsyncClient):
    response = await client.post(
        "/api/v1/users",
        json={"email": "lost@example.com", "password": "secret", "address": "Atlantis"},
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Invalid address. Geo location not found."


@pytest.mark.asyncio
async def test_register_validation(client: AsyncClient):
    response = await client.post("/api/v1/users", json={"email": "new@example.com", "password": ""})
    assert response.status_code == 400
    assert json.loads(response.json()["message"]) == [
        "password should not be empty",
        "address should not be empty",
    ]


@pytest.mark.asyncio
async def test_login_issues_stored_token(client: AsyncClient, session, test_user):
    response = await client.post("/api/v1/auth/login", json={"email": test_user.email, "password": "password123"})
    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["expiresAt"]

    stored = await AccessTokenRepository(session).get_by_token_with_user(data["token"])
    assert stored is not None
    assert stored.user_id == test_user.id


@pytest.mark.asyncio
async def test_login_token_authenticates_requests(client: AsyncClient, session, test_user):
    await create_farm(session, test_user, "bp")
    login = await client.post("/api/v1/auth/login", json={"email": test_user.email, "password": "password123"})
    headers = {"Authorization": f"Bearer {login.json()['token']}"}
    response = await client.get("/api/v1/farms", headers=headers)
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["wrong", "password1234"])
async def test_login_with_bad_password(client: AsyncClient, test_user, password):
    response = await client.post("/api/v1/auth/login", json={"email": test_user.email, "password": password})
    assert response.status_code == 422
    assert response.json() == {"name": "UnprocessableEntityError", "message": "Invalid user email or password"}


@pytest.mark.asyncio
async def test_login_with_unknown_email(client: AsyncClient):
    response = await client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    ["Bearer not-a-jwt", "Basic dXNlcjpwYXNz", "Bearer"],
)
async def test_malformed_credentials_are_unauthorized(client: AsyncClient, header):
    response = await client.get("/api/v1/farms", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["name"] == "UnauthorizedError"


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized(client: AsyncClient, session, test_user):
    # the JWT itself is still valid; only the stored expiry has passed
    token = await issue_token(session, test_user, expires_in=timedelta(seconds=-1))
    response = await client.get("/api/v1/farms", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unstored_token_is_unauthorized(client: AsyncClient, test_user):
    token, _ = create_access_token(test_user.id)
    response = await client.get("/api/v1/farms", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401

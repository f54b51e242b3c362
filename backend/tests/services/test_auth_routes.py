"""Auth & User Route tests — HTTP contract for register, login, me, profile.

Tests cover:
    - Register 201 → login 200 → /me 200 with the issued token
    - Duplicate registration 409, invalid payload 400
    - Missing, malformed and unknown-user tokens → 401 + WWW-Authenticate
"""

import uuid

from multiblog.api.dependencies import get_token_service


async def test_register_login_me_flow(client):
    resp = await client.post("/api/v1/auth/register", json={
        "username": "carol", "email": "Carol@Example.com", "password": "s3cret-pass",
    })
    assert resp.status_code == 201
    assert resp.json()["email"] == "carol@example.com"
    assert "password" not in resp.text

    resp = await client.post("/api/v1/auth/login", json={
        "email": "carol@example.com", "password": "s3cret-pass",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["username"] == "carol"

    resp = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert resp.status_code == 200
    assert resp.json()["id"] == body["id"]
    assert "password_hash" not in resp.json()


async def test_register_duplicate_username_409(client, alice):
    resp = await client.post("/api/v1/auth/register", json={
        "username": "alice", "email": "new@example.com", "password": "s3cret-pass",
    })
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "DUPLICATE_ACCOUNT"


async def test_register_invalid_payload_400(client):
    resp = await client.post("/api/v1/auth/register", json={
        "username": "x", "email": "not-an-email", "password": "short",
    })
    assert resp.status_code == 400
    fields = {d["field"] for d in resp.json()["error"]["details"]}
    assert {"body.username", "body.email", "body.password"} <= fields


async def test_login_wrong_password_401(client):
    await client.post("/api/v1/auth/register", json={
        "username": "carol", "email": "carol@example.com", "password": "s3cret-pass",
    })
    resp = await client.post("/api/v1/auth/login", json={
        "email": "carol@example.com", "password": "wrong-pass",
    })
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "AUTHENTICATION_FAILED"


async def test_me_without_token_401(client):
    resp = await client.get("/api/v1/auth/me")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


async def test_me_with_garbage_token_401(client):
    resp = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not.a.jwt"},
    )
    assert resp.status_code == 401


async def test_token_for_deleted_user_401(client):
    token = get_token_service().sign({
        "sub": str(uuid.uuid4()), "username": "ghost", "email": "ghost@example.com",
    })
    resp = await client.get(
        "/api/v1/users/profile", headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 401


async def test_profile_returns_caller(client, alice, auth_headers):
    resp = await client.get("/api/v1/users/profile", headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert resp.json()["email"] == "alice@example.com"

"""Регистрация, вход, текущий пользователь и смена роли."""

from app.core.guard import SESSION_COOKIE
from app.core.security import verify_token
from app.domains.identity.entities import UserRole

REGISTRATION = {"email": "writer@example.com", "username": "writer", "password": "Secret123"}


async def test_register_login_and_me(client):
    registered = await client.post("/auth/register", json=REGISTRATION)
    assert registered.status_code == 201
    assert registered.json()["role"] == "USER"

    login = await client.post(
        "/auth/login", json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]},
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert SESSION_COOKIE in login.headers["set-cookie"]

    claims = verify_token(token)
    assert claims["sub"] == registered.json()["uuid"]
    assert claims["role"] == "USER"
    assert claims["username"] == "writer"
    assert claims["email"] == "writer@example.com"

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "writer@example.com"


async def test_register_duplicate_email(client):
    await client.post("/auth/register", json=REGISTRATION)

    res = await client.post("/auth/register", json=dict(REGISTRATION, username="another"))

    assert res.status_code == 400
    assert res.json()["detail"] == "Email already registered"


async def test_register_rejects_weak_password(client):
    res = await client.post("/auth/register", json=dict(REGISTRATION, password="password"))

    assert res.status_code == 422


async def test_login_with_wrong_password(client):
    await client.post("/auth/register", json=REGISTRATION)

    res = await client.post(
        "/auth/login", json={"email": REGISTRATION["email"], "password": "Wrong1234"},
    )

    assert res.status_code == 401


async def test_admin_changes_role(client, make_user, auth_headers):
    admin = await make_user(UserRole.ADMIN)
    user = await make_user(UserRole.USER)

    res = await client.patch(
        f"/auth/users/{user.uuid}/role", json={"role": "EDITOR"}, headers=auth_headers(admin),
    )

    assert res.status_code == 200
    assert res.json()["role"] == "EDITOR"


async def test_only_admin_changes_roles(client, make_user, auth_headers):
    editor = await make_user(UserRole.EDITOR)
    user = await make_user(UserRole.USER)

    res = await client.patch(
        f"/auth/users/{user.uuid}/role", json={"role": "ADMIN"}, headers=auth_headers(editor),
    )

    assert res.status_code == 403

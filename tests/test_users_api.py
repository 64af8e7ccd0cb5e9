from tests.conftest import API

USERS = f"{API}/users"

async def test_is_admin(client, customer, admin):
    _, customer_headers = customer
    _, admin_headers = admin
    resp = await client.get(f"{USERS}/me/is-admin", headers=customer_headers)
    assert resp.json() == {"is_admin": False}
    resp = await client.get(f"{USERS}/me/is-admin", headers=admin_headers)
    assert resp.json() == {"is_admin": True}

async def test_is_admin_requires_token(client):
    resp = await client.get(f"{USERS}/me/is-admin")
    assert resp.status_code == 401
    resp = await client.get(f"{USERS}/me/is-admin", headers={"Authorization": "Bearer nonsense"})
    assert resp.status_code == 401

async def test_refresh_token_is_not_an_access_token(client, customer):
    _, headers = customer
    resp = await client.post(
        f"{API}/auth/login", data={"username": "diner@example.com", "password": "correct horse battery"}
    )
    refresh = resp.json()["refresh_token"]
    resp = await client.get(f"{USERS}/me/is-admin", headers={"Authorization": f"Bearer {refresh}"})
    assert resp.status_code == 401

async def test_email_of_self(client, customer):
    user_id, headers = customer
    resp = await client.post(f"{USERS}/email", json={"user_id": user_id}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == "diner@example.com"

async def test_email_of_someone_else(client, customer, admin):
    customer_id, customer_headers = customer
    admin_id, admin_headers = admin

    resp = await client.post(f"{USERS}/email", json={"user_id": admin_id}, headers=customer_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Unauthorized"

    resp = await client.post(f"{USERS}/email", json={"user_id": customer_id}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == "diner@example.com"

async def test_email_without_token(client):
    resp = await client.post(f"{USERS}/email", json={"user_id": 1})
    assert resp.status_code == 401

async def test_email_of_missing_user(client, admin):
    _, headers = admin
    resp = await client.post(f"{USERS}/email", json={"user_id": 9999}, headers=headers)
    assert resp.status_code == 500

async def test_register_cannot_grant_admin(client):
    resp = await client.post(
        f"{API}/auth/register",
        json={"email": "sneaky@example.com", "password": "pw12345", "role": "admin"},
    )
    assert resp.status_code == 200
    assert resp.json()["role"] == "user"

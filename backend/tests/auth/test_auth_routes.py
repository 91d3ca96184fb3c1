REGISTER_PAYLOAD = {
    "name": "Alice Smith",
    "email": "alice@example.com",
    "password": "secret123",
}


async def _login(client, password="secret123"):
    return await client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": password},
    )


async def test_register(client):
    response = await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Alice Smith"
    assert data["email"] == "alice@example.com"
    assert "id" in data
    assert "password_hash" not in data


async def test_register_duplicate_email(client):
    await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    response = await client.post(
        "/api/auth/register", json={**REGISTER_PAYLOAD, "name": "Bob Jones"}
    )
    assert response.status_code == 409


async def test_register_short_password(client):
    response = await client.post(
        "/api/auth/register", json={**REGISTER_PAYLOAD, "password": "short"}
    )
    assert response.status_code == 422


async def test_login(client):
    await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    response = await _login(client)
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0


async def test_login_wrong_password(client):
    await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    response = await _login(client, password="wrong")
    assert response.status_code == 401


async def test_me(client):
    await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    token = (await _login(client)).json()["access_token"]

    response = await client.get(
        "/api/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"


async def test_me_no_token(client):
    response = await client.get("/api/auth/me")
    assert response.status_code in (401, 403)

"""Session & Users routes — selection login, logout, registration, user list."""

from taskboard.core.domain_types import Table


async def test_list_users(client):
    response = await client.get("/api/v1/users")
    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["Ann", "Bob"]


async def test_session_starts_anonymous(client):
    response = await client.get("/api/v1/session")
    assert response.json() == {"status": "anonymous", "user": None}


async def test_login_binds_session(client, identity_store):
    response = await client.post("/api/v1/session/login", json={"user_id": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "authenticated"
    assert body["user"]["name"] == "Bob"
    assert '"Bob"' in identity_store.get()


async def test_login_unknown_user_is_404(client):
    response = await client.post("/api/v1/session/login", json={"user_id": 99})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert (await client.get("/api/v1/session")).json()["status"] == "anonymous"


async def test_login_without_body_is_validation_error(client):
    response = await client.post("/api/v1/session/login", json={})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_logout(ann_client, identity_store):
    response = await ann_client.post("/api/v1/session/logout")
    assert response.json()["status"] == "anonymous"
    assert identity_store.get() is None


async def test_register_user_logs_in(client, gateway):
    response = await client.post(
        "/api/v1/users", json={"name": "Tanaka", "email": "t@x.com"},
    )
    assert response.status_code == 201
    assert response.json()["id"] == 3
    session = (await client.get("/api/v1/session")).json()
    assert session["user"]["name"] == "Tanaka"
    assert len(gateway.tables[Table.USERS]) == 3


async def test_register_blank_name_is_400_without_store_call(client, gateway):
    response = await client.post("/api/v1/users", json={"name": " ", "email": "t@x.com"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_REJECTED"
    assert gateway.calls == []


async def test_register_store_failure_is_503(client, gateway):
    gateway.fail("insert", Table.USERS)
    response = await client.post("/api/v1/users", json={"name": "T", "email": "t@x.com"})
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "MUTATION_FAILED"

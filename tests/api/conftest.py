"""API test fixtures — the FastAPI app wired to a board over the fake gateway.

Design Decisions:
    - get_board is overridden instead of running the lifespan: ASGITransport does
      not send lifespan events, and the routes only ever see the board
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.api.dependencies import get_board
from taskboard.main import app


@pytest.fixture
async def started(board, gateway):
    """Board loaded with two users (Ann=1, Bob=2) and one task each."""
    ann = gateway.seed_user("Ann")
    bob = gateway.seed_user("Bob")
    gateway.seed_task("buy milk", ann["id"])
    gateway.seed_task("fix bike", bob["id"])
    await board.start()
    gateway.calls.clear()
    return board


@pytest.fixture
async def client(started):
    app.dependency_overrides[get_board] = lambda: started
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def ann_client(client):
    response = await client.post("/api/v1/session/login", json={"user_id": 1})
    assert response.status_code == 200
    return client

"""Root conftest — shared test configuration and board fixtures."""

import os

import pytest

# Ensure tests never touch a developer's real store or identity file
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IDENTITY_PATH", ".pytest-identity.json")
os.environ.setdefault("CREATE_SCHEMA_ON_STARTUP", "false")

from taskboard.infrastructure.identity_store import MemoryIdentityStore  # noqa: E402
from taskboard.services.task_board import TaskBoard  # noqa: E402
from tests.services.fake_gateway import FakeStoreGateway  # noqa: E402


@pytest.fixture
def gateway():
    return FakeStoreGateway()


@pytest.fixture
def identity_store():
    return MemoryIdentityStore()


@pytest.fixture
def board(gateway, identity_store):
    return TaskBoard(gateway, identity_store)

"""Root conftest — shared test configuration and workspace fixtures."""

import os

import pytest

# Tests never touch a real Postgres; routes run against in-memory SQLite
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from app.infrastructure.memory_workspace import InMemoryWorkspace  # noqa: E402


@pytest.fixture
def workspace() -> InMemoryWorkspace:
    """Workspace with one channel, one parent message and two people.

    IDs are fixed so tests can refer to them directly:
        channel  "ch-general" (name "general")
        message  "msg-1"
        persons  "person-alice" (Alice), "person-bob" (Bob)
    """
    ws = InMemoryWorkspace()
    channel = ws.add_channel("general", channel_id="ch-general")
    ws.add_message(channel.id, "Release planning", message_id="msg-1")
    ws.add_person("person-alice", "Alice")
    ws.add_person("person-bob", "Bob")
    return ws

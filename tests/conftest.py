"""Shared fixtures: in-memory storage and no assistant delay for every test."""

from __future__ import annotations

import os

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ASSISTANT_REPLY_DELAY_SECONDS", "0")
os.environ.setdefault("CHAT_PROVIDER", "echo")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from eventhub.main import app, event_repo, notification_repo, store  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_repos():
    """Reset the app's repositories and backing store around each test."""
    event_repo.clear()
    notification_repo.clear()
    store._values.clear()
    yield
    event_repo.clear()
    notification_repo.clear()
    store._values.clear()


@pytest.fixture()
def client():
    return TestClient(app)

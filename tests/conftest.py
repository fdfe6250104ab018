from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from typetester.db import session as db_session
from typetester.main import app

TEST_SECRET = "test-secret-key"


@pytest.fixture(autouse=True)
def test_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Use a temporary SQLite DB and a known signing secret for every test."""
    db_path = tmp_path / "typetester.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET)
    db_session.reset_engine()
    db_session.init_db()
    yield
    db_session.reset_engine()


@pytest.fixture
def db() -> Iterator[Session]:
    session = db_session.get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client: TestClient) -> Callable[..., httpx.Response]:
    """POST /api/auth/register with sensible defaults."""

    def _register(
        email: str = "alice@example.com",
        username: str = "alice",
        password: str = "secret123",
    ) -> httpx.Response:
        return client.post(
            "/api/auth/register",
            json={"email": email, "username": username, "password": password},
        )

    return _register


@pytest.fixture
def alice(register: Callable[..., httpx.Response]) -> dict:
    """A registered user: {"id", "token", "headers"}."""
    data = register().json()
    return {
        "id": data["user"]["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }

"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from fastapi.testclient import TestClient  # noqa: E402

from contest_tracker.config import reset_settings_cache  # noqa: E402
from contest_tracker.domain.entities import User  # noqa: E402
from contest_tracker.infrastructure import database, models  # noqa: E402,F401
from contest_tracker.infrastructure.repositories import UserRepository  # noqa: E402
from contest_tracker.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
)
from contest_tracker.utils import get_app_timezone, now_utc  # noqa: E402

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings from the environment around every test."""

    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def db_session():
    """Return a session bound to an empty schema."""

    database.Base.metadata.drop_all(bind=database.engine)
    database.initialize_database()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(db_session):
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    """Return a test client bound to a clean application instance."""

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def user_factory(db_session) -> Callable[..., User]:
    def _create(
        email: str = "ada@example.com",
        *,
        name: str = "Ada Lovelace",
        password: str = DEFAULT_PASSWORD,
        verified: bool = True,
    ) -> User:
        return UserRepository(db_session).create(
            User(
                id=None,
                name=name,
                email=email,
                password=get_password_hash(password),
                email_verified_at=now_utc() if verified else None,
                created_at=now_utc(),
            )
        )

    return _create


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def sendgrid_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable SendGrid delivery with dummy credentials."""

    monkeypatch.setenv("SENDGRID_API_KEY", "SG.test-key")
    monkeypatch.setenv("SENDGRID_SENDER", "reminders@example.com")
    reset_settings_cache()


@pytest.fixture()
def feed_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build HTTP clients whose requests are answered by ``handler``."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory

"""FastAPI dependency utilities."""

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from contest_tracker.config import get_settings
from contest_tracker.domain.entities import User
from contest_tracker.infrastructure.database import get_db
from contest_tracker.infrastructure.feeds import (
    FeedAdapter,
    create_feed_client,
    get_default_adapters,
)
from contest_tracker.infrastructure.repositories import UserRepository
from contest_tracker.infrastructure.security import decode_access_token, matches_shared_secret

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Could not validate credentials") from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _unauthorized("Could not validate credentials")

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def verify_cron_secret(authorization: str | None = Header(default=None)) -> None:
    """Reject job invocations that do not carry ``Bearer <CRON_SECRET>``."""

    scheme, _, credentials = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not matches_shared_secret(
        credentials.strip(), get_settings().cron_secret
    ):
        raise _unauthorized()


def get_feed_adapters() -> list[FeedAdapter]:
    """Return the adapters queried by the contest endpoints."""

    return get_default_adapters()


async def get_feed_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield an upstream HTTP client closed once the request completes."""

    async with create_feed_client(timeout=get_settings().upstream_timeout_seconds) as client:
        yield client

"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from contest_tracker.infrastructure.repositories import UserRepository
from contest_tracker.infrastructure.security import verify_password

from .validators import ensure_valid_email


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    UNVERIFIED = auto()


def authenticate_user(session: Session, email: str, password: str):
    """Return the authentication result along with the user when possible."""

    try:
        normalized_email = ensure_valid_email(email)
    except ValueError:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    user = UserRepository(session).get_by_email(normalized_email)
    if not user or not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not user.is_verified:
        return user, AuthenticationStatus.UNVERIFIED

    return user, AuthenticationStatus.SUCCESS

"""Use cases for registering accounts and confirming their email address."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from contest_tracker.application.errors import ConflictError, NotFoundError, ValidationError
from contest_tracker.config import get_settings
from contest_tracker.domain.entities import User, VerificationToken
from contest_tracker.infrastructure.email import send_verification_email
from contest_tracker.infrastructure.repositories import (
    UserRepository,
    VerificationTokenRepository,
)
from contest_tracker.infrastructure.security import generate_otp, get_password_hash
from contest_tracker.utils import now_utc

from .validators import ensure_valid_email, ensure_valid_registration

logger = logging.getLogger(__name__)


def _issue_verification_code(session: Session, email: str, *, now: datetime) -> str:
    """Replace any outstanding code for ``email`` and email a fresh one."""

    minutes = get_settings().otp_expire_minutes
    tokens = VerificationTokenRepository(session)
    tokens.delete_for_identifier(email)
    otp = generate_otp()
    tokens.create(
        VerificationToken(identifier=email, token=otp, expires=now + timedelta(minutes=minutes))
    )
    if not send_verification_email(email, otp, expires_in_minutes=minutes):
        logger.warning("Could not send the verification code to %s", email)
    return otp


def register_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    now: datetime | None = None,
) -> User:
    """Create an unverified account and email it a verification code.

    An earlier unverified account for the same address is replaced.
    """

    now = now or now_utc()
    cleaned_name, normalized_email = ensure_valid_registration(name, email, password)
    repository = UserRepository(session)

    existing = repository.get_by_email(normalized_email)
    if existing is not None:
        if existing.is_verified:
            raise ConflictError("User with this email already exists")
        repository.delete_by_email(normalized_email)

    user = repository.create(
        User(
            id=None,
            name=cleaned_name,
            email=normalized_email,
            password=get_password_hash(password),
            email_verified_at=None,
            created_at=now,
        )
    )
    _issue_verification_code(session, normalized_email, now=now)
    return user


def resend_verification_code(session: Session, *, email: str, now: datetime | None = None) -> None:
    """Issue a new verification code for an unverified account."""

    normalized_email = ensure_valid_email(email)
    user = UserRepository(session).get_by_email(normalized_email)
    if user is None:
        raise NotFoundError("User not found")
    if user.is_verified:
        raise ValidationError("Email is already verified", field="email")
    _issue_verification_code(session, normalized_email, now=now or now_utc())


def verify_email(
    session: Session, *, email: str, otp: str, now: datetime | None = None
) -> User:
    """Consume ``otp`` and mark the account as verified."""

    now = now or now_utc()
    normalized_email = ensure_valid_email(email)
    tokens = VerificationTokenRepository(session)

    token = tokens.get(identifier=normalized_email, token=otp.strip())
    if token is None:
        raise ValidationError("Invalid verification code", field="otp")
    if token.is_expired(now):
        tokens.delete(identifier=token.identifier, token=token.token)
        raise ValidationError("Verification code has expired", field="otp")

    repository = UserRepository(session)
    if repository.get_by_email(normalized_email) is None:
        tokens.delete(identifier=token.identifier, token=token.token)
        raise NotFoundError("User not found")
    user = repository.mark_email_verified(normalized_email, verified_at=now)
    tokens.delete(identifier=token.identifier, token=token.token)
    return user


__all__ = ["register_user", "resend_verification_code", "verify_email"]

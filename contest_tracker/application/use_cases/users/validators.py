"""Common validation helpers for account use cases."""

from contest_tracker.application.errors import ValidationError
from contest_tracker.application.use_cases.subscriptions.validators import normalize_email

MIN_PASSWORD_LENGTH = 8


def ensure_valid_email(email: str) -> str:
    """Return a normalized email address or raise :class:`ValidationError`."""

    normalized = normalize_email(email)
    if normalized is None:
        raise ValidationError("Email is required", field="email")
    return normalized


def ensure_valid_registration(name: str, email: str, password: str) -> tuple[str, str]:
    """Validate a registration payload and return the cleaned name and email."""

    cleaned_name = name.strip()
    if not cleaned_name:
        raise ValidationError("Name is required", field="name")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    return cleaned_name, ensure_valid_email(email)

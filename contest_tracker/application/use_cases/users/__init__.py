"""Use cases for managing accounts."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .verification import register_user, resend_verification_code, verify_email

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "register_user",
    "resend_verification_code",
    "verify_email",
]

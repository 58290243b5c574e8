"""Domain entity representing an email verification code."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class VerificationToken:
    """One-time code issued to confirm ownership of ``identifier``."""

    identifier: str
    token: str
    expires: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires < now


__all__ = ["VerificationToken"]

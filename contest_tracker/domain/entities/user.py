"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    email_verified_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_verified(self) -> bool:
        """Return ``True`` once the user confirmed their email address."""

        return self.email_verified_at is not None


__all__ = ["User"]

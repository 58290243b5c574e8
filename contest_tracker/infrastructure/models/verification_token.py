"""SQLAlchemy model for email verification codes."""

from sqlalchemy import Column, DateTime, String

from contest_tracker.infrastructure.database import Base


class VerificationTokenModel(Base):
    """One-time verification code keyed by identifier and token."""

    __tablename__ = "verification_token"

    identifier = Column(String(255), primary_key=True)
    token = Column(String(16), primary_key=True)
    expires = Column(DateTime, nullable=False)


__all__ = ["VerificationTokenModel"]

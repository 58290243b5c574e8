"""SQLAlchemy model for contest reminder subscriptions."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from contest_tracker.infrastructure.database import Base


class ContestNotificationModel(Base):
    """Database representation of a (user, contest) reminder subscription."""

    __tablename__ = "contest_notification"
    __table_args__ = (
        UniqueConstraint("user_id", "contest_id", name="uq_contest_notification_user_contest"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    contest_id = Column(String(255), nullable=False)
    contest_name = Column(String(255), nullable=False)
    contest_platform = Column(String(50), nullable=False)
    contest_url = Column(String(500), nullable=False)
    contest_start_time = Column(DateTime, nullable=False, index=True)
    contest_end_time = Column(DateTime, nullable=False, index=True)
    notify_via_email = Column(Boolean, nullable=False, default=False)
    notify_via_whatsapp = Column(Boolean, nullable=False, default=False)
    email = Column(String(255), nullable=True)
    whatsapp_number = Column(String(32), nullable=True)
    email_sent = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=True)

    user = relationship("UserModel", back_populates="subscriptions", lazy="joined")


__all__ = ["ContestNotificationModel"]

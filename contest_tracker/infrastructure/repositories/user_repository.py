"""Persistence layer for user data."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from contest_tracker.domain.entities import User
from contest_tracker.infrastructure.models import UserModel
from contest_tracker.utils import ensure_utc, ensure_utc_naive


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = ensure_utc_naive(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_email_verified(self, email: str, *, verified_at: datetime) -> User:
        model = self._get_model(email=email)
        if not model:
            msg = f"User with email {email} not found"
            raise ValueError(msg)
        model.email_verified_at = ensure_utc_naive(verified_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_by_email(self, email: str) -> None:
        model = self._get_model(email=email)
        if not model:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            email_verified_at=ensure_utc(model.email_verified_at),
            created_at=ensure_utc(model.created_at),
        )

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.password = user.password
        model.email_verified_at = ensure_utc_naive(user.email_verified_at)

"""Persistence helpers for email verification codes."""

from __future__ import annotations

from sqlalchemy.orm import Session

from contest_tracker.domain.entities import VerificationToken
from contest_tracker.infrastructure.models import VerificationTokenModel
from contest_tracker.utils import ensure_utc, ensure_utc_naive


class VerificationTokenRepository:
    """Store and consume one-time verification codes."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, *, identifier: str, token: str) -> VerificationToken | None:
        model = self.session.get(VerificationTokenModel, (identifier, token))
        return self._to_entity(model) if model else None

    def create(self, token: VerificationToken) -> VerificationToken:
        model = VerificationTokenModel(
            identifier=token.identifier,
            token=token.token,
            expires=ensure_utc_naive(token.expires),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, *, identifier: str, token: str) -> None:
        self.session.query(VerificationTokenModel).filter_by(
            identifier=identifier, token=token
        ).delete(synchronize_session=False)
        self.session.commit()

    def delete_for_identifier(self, identifier: str) -> int:
        deleted = (
            self.session.query(VerificationTokenModel)
            .filter_by(identifier=identifier)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _to_entity(model: VerificationTokenModel) -> VerificationToken:
        return VerificationToken(
            identifier=model.identifier,
            token=model.token,
            expires=ensure_utc(model.expires),
        )


__all__ = ["VerificationTokenRepository"]

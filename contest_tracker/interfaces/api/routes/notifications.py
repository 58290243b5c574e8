"""Endpoints managing contest reminder subscriptions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contest_tracker.application.errors import NotFoundError
from contest_tracker.application.use_cases.subscriptions import (
    SubscriptionData,
    delete_subscription,
    list_user_subscriptions,
    upsert_subscription,
)
from contest_tracker.domain.entities import ContestSubscription, User
from contest_tracker.infrastructure.database import get_db
from contest_tracker.interfaces.api.dependencies import get_current_user
from contest_tracker.interfaces.api.routes_helpers import to_http_exception
from contest_tracker.interfaces.api.schemas import (
    MessageResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    NotificationUpsertResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(subscription: ContestSubscription) -> NotificationRead:
    return NotificationRead.model_validate(subscription)


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListResponse:
    """Return the caller's subscriptions for contests that have not ended."""

    subscriptions = list_user_subscriptions(db, user_id=current_user.id)
    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in subscriptions]
    )


@router.post(
    "",
    response_model=NotificationUpsertResponse,
    status_code=status.HTTP_201_CREATED,
)
def subscribe_to_contest(
    payload: NotificationCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationUpsertResponse:
    """Create the caller's reminder for a contest or update its channels."""

    data = SubscriptionData(**payload.model_dump())
    try:
        subscription, created = upsert_subscription(db, user_id=current_user.id, data=data)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A notification for this contest already exists",
        ) from exc
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    if not created:
        response.status_code = status.HTTP_200_OK
    return NotificationUpsertResponse(
        notification=_notification_to_schema(subscription), created=created
    )


@router.delete("", response_model=MessageResponse)
def unsubscribe_from_contest(
    notification_id: str | None = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Delete one of the caller's subscriptions."""

    if not notification_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Notification ID is required",
        )
    try:
        subscription_id = int(notification_id)
    except ValueError as exc:
        raise to_http_exception(NotFoundError("Notification not found")) from exc
    try:
        delete_subscription(db, user_id=current_user.id, subscription_id=subscription_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Notification deleted")

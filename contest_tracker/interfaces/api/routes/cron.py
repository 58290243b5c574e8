"""Endpoint invoked by the scheduler to send contest reminders."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from contest_tracker.application.use_cases.reminders import dispatch_reminders
from contest_tracker.infrastructure.database import get_db
from contest_tracker.interfaces.api.dependencies import verify_cron_secret
from contest_tracker.interfaces.api.schemas import ReminderRunResponse, ReminderRunResults

router = APIRouter(prefix="/cron", tags=["cron"])


@router.get(
    "/send-notifications",
    response_model=ReminderRunResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def send_notifications(response: Response, db: Session = Depends(get_db)) -> ReminderRunResponse:
    """Email reminders for contests starting within the lookahead window."""

    result = dispatch_reminders(db)
    if not result.success:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return ReminderRunResponse(
        success=result.success,
        message=result.message,
        timestamp=result.timestamp,
        results=ReminderRunResults(
            total=result.total,
            sent=result.sent,
            failed=result.failed,
            cleaned_up=result.deleted,
            errors=result.errors,
        ),
    )

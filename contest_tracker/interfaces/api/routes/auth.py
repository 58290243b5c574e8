"""Endpoints for account registration, email verification and sign-in."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from contest_tracker.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
    resend_verification_code,
    verify_email,
)
from contest_tracker.domain.entities import User
from contest_tracker.infrastructure.database import get_db
from contest_tracker.infrastructure.security import create_access_token
from contest_tracker.interfaces.api.dependencies import get_current_user
from contest_tracker.interfaces.api.routes_helpers import to_http_exception
from contest_tracker.interfaces.api.schemas import (
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResendOtpRequest,
    Token,
    UserRead,
    VerifyEmailRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _user_to_schema(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> RegisterResponse:
    """Create an account and email it a one-time verification code."""

    try:
        user = register_user(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    logger.info("Registered account %s pending verification", user.email)
    return RegisterResponse(
        user=_user_to_schema(user),
        message="Registration successful. Please check your email for the verification code.",
    )


@router.post("/resend-otp", response_model=MessageResponse)
def resend_otp(payload: ResendOtpRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Send a fresh verification code, invalidating the previous one."""

    try:
        resend_verification_code(db, email=payload.email)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Verification code sent")


@router.post("/verify-email", response_model=MessageResponse)
def verify(payload: VerifyEmailRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Confirm an email address with the code it received."""

    try:
        verify_email(db, email=payload.email, otp=payload.otp)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Email verified successfully")


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a bearer token."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.UNVERIFIED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Please verify your email before signing in",
        )

    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    """Return the account behind the bearer token."""

    return _user_to_schema(current_user)

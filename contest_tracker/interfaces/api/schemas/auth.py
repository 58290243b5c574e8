"""Authentication related schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .base import CamelModel


class Token(BaseModel):
    access_token: str
    token_type: str


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class ResendOtpRequest(CamelModel):
    email: EmailStr


class VerifyEmailRequest(CamelModel):
    email: EmailStr
    otp: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")


class UserRead(CamelModel):
    id: int
    name: str
    email: EmailStr
    email_verified_at: datetime | None = None
    created_at: datetime | None = None


class RegisterResponse(CamelModel):
    user: UserRead
    message: str
    requires_verification: bool = True

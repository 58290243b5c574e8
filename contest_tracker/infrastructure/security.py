"""Security helpers for hashing, token generation and shared secrets."""

from datetime import timedelta
import secrets

from jose import JWTError, jwt
from passlib.context import CryptContext

from contest_tracker.config import get_settings
from contest_tracker.utils import now_utc

OTP_LENGTH = 6

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = now_utc() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm="HS256")


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=["HS256"])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_otp() -> str:
    """Return a random six digit numeric verification code."""

    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def matches_shared_secret(provided: str | None, expected: str | None) -> bool:
    """Compare ``provided`` against ``expected`` in constant time.

    An unset ``expected`` secret never matches.
    """

    if not expected or provided is None:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())

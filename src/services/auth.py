"""Authentication service for JWT and password handling."""

from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.concurrency import run_in_threadpool
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JOSEError
from passlib.context import CryptContext
from pydantic import ValidationError

from src.config import get_settings
from src.schemas.auth import TokenClaims

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class TokenError(Exception):
    """A bearer token could not be accepted."""


class MalformedToken(TokenError):
    """The token is not a parseable JWT."""


class InvalidSignature(TokenError):
    """The token was not signed with the server secret."""


class ExpiredToken(TokenError):
    """The token's expiry is in the past."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unknown or corrupt hash format
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


async def hash_password_async(password: str) -> str:
    """Hash a password without blocking the event loop."""
    return await run_in_threadpool(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password without blocking the event loop."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


def issue_token(
    claims: dict[str, Any],
    secret: str,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> str:
    """Sign ``claims`` into a token that expires ``ttl`` from now."""
    issued_at = datetime.now(UTC)
    to_encode = {**claims, "iat": issued_at, "exp": issued_at + ttl}
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Verify a token and return its claims.

    Raises:
        MalformedToken: the token cannot be parsed.
        InvalidSignature: the signature does not match ``secret``.
        ExpiredToken: the signature matches but ``exp`` has passed.
    """
    try:
        jwt.get_unverified_claims(token)
    except JOSEError as e:
        raise MalformedToken(str(e)) from e

    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as e:
        raise ExpiredToken(str(e)) from e
    except JOSEError as e:
        raise InvalidSignature(str(e)) from e


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    return issue_token(
        {"sub": str(user_id), "email": email},
        settings.jwt_secret,
        timedelta(minutes=settings.jwt_expiration_minutes),
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, secret: str | None = None) -> TokenClaims:
    """Decode and validate a session token issued by create_access_token."""
    payload = verify_token(token, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise MalformedToken("Token is missing session claims") from e

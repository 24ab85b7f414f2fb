"""FastAPI dependencies for authentication and database."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config import get_settings
from src.database import Database, get_database
from src.repositories.user_repository import UserRepository
from src.schemas.auth import TokenClaims
from src.services.auth import TokenError, decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: missing and malformed headers are told apart in authorize()
security = HTTPBearer(auto_error=False, scheme_name="bearerAuth", bearerFormat="JWT")


@dataclass(frozen=True)
class Authorized:
    """The request carries a valid session token."""

    claims: TokenClaims


@dataclass(frozen=True)
class Rejected:
    """The request must be answered with ``status_code`` and ``reason``."""

    status_code: int
    reason: str


def authorize(authorization: str | None, secret: str) -> Authorized | Rejected:
    """Check an Authorization header value against the signing secret."""
    if not authorization:
        return Rejected(status.HTTP_401_UNAUTHORIZED, "token not provided")

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return Rejected(status.HTTP_401_UNAUTHORIZED, "malformed token")

    try:
        claims = decode_access_token(token, secret)
    except TokenError as e:
        logger.info(f"Rejected token: {type(e).__name__}")
        return Rejected(status.HTTP_403_FORBIDDEN, "invalid or expired token")

    return Authorized(claims)


def get_current_claims(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Gate for protected routes.

    Attaches the verified claims to ``request.state.claims``.
    """
    if credentials is not None:
        authorization = f"{credentials.scheme} {credentials.credentials}"
    else:
        authorization = request.headers.get("Authorization")

    outcome = authorize(authorization, get_settings().jwt_secret)
    if isinstance(outcome, Rejected):
        logger.info(f"{request.method} {request.url.path} rejected: {outcome.reason}")
        raise HTTPException(
            status_code=outcome.status_code,
            detail=outcome.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.claims = outcome.claims
    return outcome.claims


def get_user_repository(
    database: Annotated[Database, Depends(get_database)],
) -> UserRepository:
    """Get user repository bound to the application pool."""
    return UserRepository(database)

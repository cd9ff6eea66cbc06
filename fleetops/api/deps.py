"""Request dependencies: injected settings/token service, credential store, and bearer-token verification."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fleetops.core.config import Settings
from fleetops.core.database import get_db
from fleetops.core.security import TokenService
from fleetops.schemas.auth import TokenClaims
from fleetops.services.credentials import UserStore
from fleetops.services.errors import (
    AdminRequiredError,
    AuthServiceError,
    InternalServiceError,
    InvalidTokenError,
    NotAuthenticatedError,
)

logger = logging.getLogger(__name__)

# auto_error=False so a missing header becomes our 401 body instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Token service built from settings at app creation."""
    return request.app.state.token_service


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """
    Dependency: require a valid Bearer JWT and return its claims.

    No header (or a non-Bearer scheme) raises NotAuthenticatedError (401); a token that
    fails to parse, verify or is expired raises InvalidTokenError (403).
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    try:
        return tokens.verify(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.warning("Token rejected: %s", type(e).__name__)
        raise InvalidTokenError() from e


def require_admin(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Dependency: require an authenticated user with role 'admin'. Raises 403 for non-admin."""
    if claims.role != "admin":
        raise AdminRequiredError()
    return claims


@contextmanager
def reported_as_internal(message: str) -> Iterator[None]:
    """
    Let AuthServiceError through unchanged; log anything else and re-raise it as
    InternalServiceError(message) so the client only sees the generic message.
    """
    try:
        yield
    except AuthServiceError:
        raise
    except Exception as e:
        logger.exception("%s: %s", message, type(e).__name__)
        raise InternalServiceError(message) from e

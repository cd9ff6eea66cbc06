"""Pydantic request/response schemas."""

from fleetops.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    PublicUser,
    SignupRequest,
    SignupResponse,
    TokenClaims,
    UsersListResponse,
)
from fleetops.schemas.health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "PublicUser",
    "SignupRequest",
    "SignupResponse",
    "TokenClaims",
    "UsersListResponse",
]

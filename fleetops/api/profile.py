"""Profile endpoints for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fleetops.api.deps import get_current_claims, get_user_store, reported_as_internal
from fleetops.schemas.auth import (
    ErrorResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    PublicUser,
    TokenClaims,
)
from fleetops.services import auth as auth_service
from fleetops.services.credentials import UserStore

router = APIRouter()

_AUTH_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.get("", response_model=PublicUser, responses=_AUTH_ERRORS)
def get_profile(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> PublicUser:
    """
    Return the identity carried by the caller's token.

    Served from the token claims without a database read, so changes made after
    login show up only once the user logs in again.
    """
    with reported_as_internal("Failed to fetch profile"):
        profile = claims.to_public_user()
    return profile


@router.put(
    "",
    response_model=ProfileUpdateResponse,
    responses={**_AUTH_ERRORS, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_profile(
    body: ProfileUpdateRequest,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> ProfileUpdateResponse:
    """Update name, email and/or password. The current token is not re-issued."""
    with reported_as_internal("Error updating profile"):
        user = auth_service.update_profile(store, claims.id, body.changes())
    return ProfileUpdateResponse(user=PublicUser.model_validate(user))

"""Signup and login endpoints (no token required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from fleetops.api.deps import (
    get_app_settings,
    get_token_service,
    get_user_store,
    reported_as_internal,
)
from fleetops.core.config import Settings
from fleetops.core.security import TokenService
from fleetops.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    PublicUser,
    SignupRequest,
    SignupResponse,
)
from fleetops.services import auth as auth_service
from fleetops.services.credentials import UserStore

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def signup(
    body: SignupRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SignupResponse:
    """Create an account with the default role. Fails with 409 if the email is already in use."""
    with reported_as_internal("Server error during signup"):
        user = auth_service.signup(
            store,
            name=body.name,
            email=body.email,
            password=body.password,
            role=settings.DEFAULT_USER_ROLE,
        )
    return SignupResponse(user=PublicUser.model_validate(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT valid for one day.
    Include the token in the Authorization header as: Bearer <token>
    """
    with reported_as_internal("Server error during login"):
        token, user = auth_service.login(store, tokens, body.email, body.password)
    return LoginResponse(token=token, user=PublicUser.model_validate(user))

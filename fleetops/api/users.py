"""Admin-only user listing."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fleetops.api.deps import get_user_store, require_admin
from fleetops.schemas.auth import PublicUser, TokenClaims, UsersListResponse
from fleetops.services.credentials import UserStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[PublicUser.model_validate(u) for u in store.list_users()]
    )

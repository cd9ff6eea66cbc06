"""API routes."""

from fastapi import APIRouter

from fleetops.api import auth, health, profile, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(users.router, prefix="/users", tags=["users"])

"""Core app configuration, database and security primitives."""

from fleetops.core.config import Settings, get_settings
from fleetops.core.database import get_db
from fleetops.core.security import TokenService

__all__ = ["Settings", "TokenService", "get_settings", "get_db"]

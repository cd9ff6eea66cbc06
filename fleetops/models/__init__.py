"""SQLAlchemy ORM models."""

from fleetops.models.base import Base
from fleetops.models.user import User

__all__ = ["Base", "User"]

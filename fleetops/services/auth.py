"""Signup, login and profile update built on the credential store, hasher and token service."""

import logging

from fleetops.core.security import TokenService, hash_password, verify_password
from fleetops.models import User
from fleetops.services.credentials import UserStore
from fleetops.services.errors import (
    EmailInUseError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def signup(
    store: UserStore,
    name: str,
    email: str,
    password: str,
    role: str = "user",
) -> User:
    """Create an account. Raises EmailInUseError if the email is already registered."""
    if store.find_by_email(email) is not None:
        raise EmailInUseError()
    user = store.create_user(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    logger.info("Signup: created user id=%s role=%s", user.id, user.role)
    return user


def authenticate(store: UserStore, email: str, password: str) -> User:
    """Return the user whose credentials match, else raise InvalidCredentialsError."""
    user = store.find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsError()
    return user


def login(
    store: UserStore,
    tokens: TokenService,
    email: str,
    password: str,
) -> tuple[str, User]:
    """Authenticate and issue a bearer token for the user. Returns (token, user)."""
    user = authenticate(store, email, password)
    token = tokens.issue(
        user_id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
    )
    logger.info("Login: user id=%s", user.id)
    return token, user


def update_profile(store: UserStore, user_id: str, changes: dict[str, str]) -> User:
    """
    Apply a partial update of name, email and/or password to the user.

    A new password is re-hashed before it is stored. The email must not belong to
    another account. No token is re-issued: existing tokens keep their old claims.
    """
    fields: dict[str, str] = {}
    if "name" in changes:
        fields["name"] = changes["name"]
    if "email" in changes:
        owner = store.find_by_email(changes["email"])
        if owner is not None and owner.id != user_id:
            raise EmailInUseError()
        fields["email"] = changes["email"]
    if "password" in changes:
        fields["password_hash"] = hash_password(changes["password"])

    user = store.update_by_id(user_id, fields)
    if user is None:
        raise UserNotFoundError()
    logger.info("Profile updated: user id=%s fields=%s", user_id, sorted(changes))
    return user

"""Credential store: persistence of user identity records."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetops.models import User
from fleetops.services.errors import EmailInUseError

logger = logging.getLogger(__name__)

# role is deliberately absent: profile updates cannot change it.
UPDATABLE_FIELDS = frozenset({"name", "email", "password_hash"})


class UserStore:
    """
    Find/create/update users on a SQLAlchemy session.

    Email uniqueness is backed by the unique index on users.email, so a concurrent
    duplicate insert fails in the database and is reported as EmailInUseError
    after rolling back; no partial record is left behind.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def list_users(self) -> list[User]:
        return self.session.query(User).order_by(User.created_at, User.email).all()

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str = "user",
    ) -> User:
        """Insert a new user and commit. Raises EmailInUseError if the email is taken."""
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Insert rejected by unique constraint for email=%s", email)
            raise EmailInUseError() from e
        self.session.refresh(user)
        return user

    def update_by_id(self, user_id: str, fields: dict[str, str]) -> User | None:
        """
        Merge the given fields into the user and commit; fields not given are untouched.
        Returns None if the user does not exist. Raises EmailInUseError on an email collision.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise EmailInUseError() from e
        self.session.refresh(user)
        return user

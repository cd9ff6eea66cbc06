"""
Create a user (e.g. the first admin; signup only creates regular users). Run from project root:
  python -m fleetops.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m fleetops.scripts.create_user "Fleet Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from fleetops.core.config import get_settings
from fleetops.core.database import SessionLocal
from fleetops.core.logging import configure_logging
from fleetops.schemas.auth import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from fleetops.services import auth as auth_service
from fleetops.services.credentials import UserStore
from fleetops.services.errors import EmailInUseError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a FleetOps user.")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)

    name = args.name.strip()
    email = args.email.strip().lower()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in email or not (EMAIL_MIN_LEN <= len(email) <= EMAIL_MAX_LEN):
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    if len(args.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        print(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = auth_service.signup(
            UserStore(db),
            name=name,
            email=email,
            password=args.password,
            role=args.role,
        )
    except EmailInUseError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{email}' (id {user.id}) with role '{args.role}'.")
    return 0

if __name__ == "__main__":
    sys.exit(main())

"""Password hashing and JWT issuance/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from fleetops.schemas.auth import PASSWORD_MAX_BYTES, TokenClaims

if TYPE_CHECKING:
    from fleetops.core.config import Settings

# Bcrypt cost (rounds). Fixed; not read from configuration.
BCRYPT_ROUNDS = 10

DEFAULT_TOKEN_LIFETIME = timedelta(days=1)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)
_MICROS_PER_SECOND = 1_000_000


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.
    Raises ValueError for passwords longer than bcrypt's 72-byte input.
    """
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes and oversized passwords never match."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    The signing key is handed in at construction; one instance is built per
    application from Settings and shared by every request (it holds no mutable state).
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            lifetime=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )

    def issue(
        self,
        user_id: str,
        email: str,
        name: str,
        role: str,
        now: datetime | None = None,
    ) -> str:
        """
        Create a JWT carrying the identity claims, iat, exp = iat + lifetime, and a unique jti.

        iat and exp are fractional NumericDates (microsecond resolution) so the token
        lives exactly `lifetime` from the issuing instant, not from the second before it.
        """
        iat_us = _to_micros(now or datetime.now(UTC))
        exp_us = iat_us + self.lifetime // _MICROSECOND
        payload: dict[str, Any] = {
            "id": str(user_id),
            "email": email,
            "name": name,
            "role": role,
            "iat": iat_us / _MICROS_PER_SECOND,
            "exp": exp_us / _MICROS_PER_SECOND,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """
        Check signature, validate the claim set, then check expiry against `now`.
        Raises jwt.PyJWTError on malformed, tampered, expired or incomplete tokens.
        """
        # PyJWT truncates exp to whole seconds, so expiry is checked below instead.
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={
                "require": ["exp", "iat", "id", "email", "name", "role"],
                "verify_exp": False,
            },
        )
        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise jwt.InvalidTokenError(f"Invalid token claims: {e.error_count()} error(s)") from e
        if _to_micros(now or datetime.now(UTC)) >= round(claims.exp * _MICROS_PER_SECOND):
            raise jwt.ExpiredSignatureError("Signature has expired")
        return claims


def _to_micros(moment: datetime) -> int:
    """Exact microseconds since the Unix epoch for an aware datetime."""
    return (moment - _EPOCH) // _MICROSECOND

"""Request/response schemas for auth and profile endpoints."""

from pydantic import BaseModel, Field, field_validator

# Input bounds shared by the API schemas and the create_user script.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 72
# bcrypt only reads the first 72 bytes of its input; longer passwords are refused, never truncated.
PASSWORD_MAX_BYTES = 72


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Invalid email address")
    return v


def _normalize_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name must not be blank")
    return v


def check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes (UTF-8)")
    return v


class SignupRequest(BaseModel):
    """New account details for self-service signup."""

    name: str = Field(
        ..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name"
    )
    email: str = Field(
        ..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN, description="Login email"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _normalize_name(v)

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        # No format check here: an unknown email must fail like a wrong password.
        return v.strip().lower()


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged. Role cannot be changed here."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: str | None = Field(default=None, min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str | None) -> str | None:
        return None if v is None else _normalize_name(v)

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str | None) -> str | None:
        return None if v is None else _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        return None if v is None else check_password_bytes(v)

    def changes(self) -> dict[str, str]:
        """Fields the client actually supplied, with nulls dropped."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class PublicUser(BaseModel):
    """User fields safe to return to clients (never the password hash)."""

    id: str
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class TokenClaims(BaseModel):
    """Identity snapshot carried by a verified bearer token."""

    id: str
    email: str
    name: str
    role: str
    exp: float
    iat: float
    jti: str | None = None

    def to_public_user(self) -> PublicUser:
        return PublicUser(id=self.id, name=self.name, email=self.email, role=self.role)


class SignupResponse(BaseModel):
    message: str = "User created"
    user: PublicUser


class LoginResponse(BaseModel):
    """Bearer token returned after successful login, with the account it belongs to."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
    user: PublicUser


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile updated"
    user: PublicUser


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[PublicUser]


class ErrorResponse(BaseModel):
    """Body of every auth/profile error response."""

    error: str

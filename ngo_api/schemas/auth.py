"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from ngo_api.db.enums import Role


class TokenPayload(BaseModel):
    """Decoded JWT payload structure."""
    sub: UUID  # user_id
    role: str
    token_version: int


class UserSession(BaseModel):
    """
    Full session context for authenticated requests.

    This is returned by get_current_session dependency
    and contains all information needed for authorization.
    """
    user_id: UUID
    role: Role  # Validated enum
    email: str
    name: str | None = None
    permissions: dict = Field(default_factory=dict)
    via_cookie: bool = False


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=2, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("name must be at least 2 characters")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class RoleRead(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    permissions: dict

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    """Response schema for GET /auth/me endpoint."""
    id: UUID
    email: str
    name: str | None
    is_active: bool
    role: RoleRead

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    user: MeResponse
    token: str

"""Schemas for user administration."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ngo_api.db.enums import Role
from ngo_api.schemas.auth import RoleRead


class UserRead(BaseModel):
    id: UUID
    email: str
    name: str | None
    is_active: bool
    role: RoleRead
    last_login_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=2, max_length=255)
    role: Role = Role.VIEWER
    is_active: bool = True


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    name: str | None = Field(default=None, min_length=2, max_length=255)
    role: Role | None = None
    is_active: bool | None = None


class PasswordReset(BaseModel):
    new_password: str = Field(min_length=6, max_length=128)

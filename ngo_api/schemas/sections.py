"""Schemas for dashboard sections and section permissions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ngo_api.schemas.auth import RoleRead


class SectionPermissionRead(BaseModel):
    id: UUID
    user_id: UUID
    section_key: str
    created_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SectionPermissionsResponse(BaseModel):
    permissions: list[SectionPermissionRead]


class SectionPermissionsUpdate(BaseModel):
    section_keys: list[str] = Field(default_factory=list, max_length=100)


class SectionRead(BaseModel):
    key: str
    label: str


class SectionGroupRead(BaseModel):
    name: str
    sections: list[SectionRead]


class SectionRegistryResponse(BaseModel):
    sections: list[SectionRead]
    groups: list[SectionGroupRead]


class UserPermissionsResponse(BaseModel):
    """Current user with role and allowed sections."""
    id: UUID
    email: str
    name: str | None
    is_active: bool
    role: RoleRead
    allowed_sections: list[str]

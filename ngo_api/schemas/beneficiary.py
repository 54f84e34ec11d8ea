"""Schemas for beneficiaries."""

import re
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ngo_api.db.enums import Gender

DPI_PATTERN = re.compile(r"^\d{13}$")


def _check_dpi(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    v = v.replace(" ", "")
    if not DPI_PATTERN.match(v):
        raise ValueError("DPI must have exactly 13 digits")
    return v


def _check_admission_date(v: date | None) -> date | None:
    if v is not None and v > date.today():
        raise ValueError("admission_date cannot be in the future")
    return v


class BeneficiaryCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    age: int = Field(..., gt=0, le=120)
    gender: Gender
    dpi: str | None = None
    program: str = Field(..., min_length=1, max_length=255)
    photo_url: str | None = Field(default=None, max_length=1000)
    admission_date: date
    is_active: bool = True
    department: str = Field(..., min_length=1, max_length=100)
    municipality: str = Field(..., min_length=1, max_length=100)
    village: str | None = Field(default=None, max_length=255)
    address: str | None = None
    google_maps_url: str | None = Field(default=None, max_length=1000)
    personal_contact: str | None = Field(default=None, max_length=255)
    personal_number: str | None = Field(default=None, max_length=50)
    community_contact: str | None = Field(default=None, max_length=255)
    community_number: str | None = Field(default=None, max_length=50)

    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v: str | None) -> str | None:
        return _check_dpi(v)

    @field_validator("admission_date")
    @classmethod
    def validate_admission_date(cls, v: date | None) -> date | None:
        return _check_admission_date(v)


class BeneficiaryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    age: int | None = Field(default=None, gt=0, le=120)
    gender: Gender | None = None
    dpi: str | None = None
    program: str | None = Field(default=None, min_length=1, max_length=255)
    photo_url: str | None = Field(default=None, max_length=1000)
    admission_date: date | None = None
    is_active: bool | None = None
    department: str | None = Field(default=None, min_length=1, max_length=100)
    municipality: str | None = Field(default=None, min_length=1, max_length=100)
    village: str | None = Field(default=None, max_length=255)
    address: str | None = None
    google_maps_url: str | None = Field(default=None, max_length=1000)
    personal_contact: str | None = Field(default=None, max_length=255)
    personal_number: str | None = Field(default=None, max_length=50)
    community_contact: str | None = Field(default=None, max_length=255)
    community_number: str | None = Field(default=None, max_length=50)

    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v: str | None) -> str | None:
        return _check_dpi(v)

    @field_validator("admission_date")
    @classmethod
    def validate_admission_date(cls, v: date | None) -> date | None:
        return _check_admission_date(v)


class BeneficiaryRead(BaseModel):
    id: UUID
    name: str
    age: int
    gender: str
    dpi: str | None
    program: str
    photo_url: str | None
    admission_date: date
    is_active: bool
    department: str
    municipality: str
    village: str | None
    address: str | None
    google_maps_url: str | None
    personal_contact: str | None
    personal_number: str | None
    community_contact: str | None
    community_number: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BeneficiaryListResponse(BaseModel):
    beneficiaries: list[BeneficiaryRead]
    total: int


class DepartmentBreakdown(BaseModel):
    total: int = 0
    masculino: int = 0
    femenino: int = 0
    programs: dict[str, int] = Field(default_factory=dict)


class BeneficiaryStats(BaseModel):
    total: int
    active: int
    inactive: int
    by_gender: dict[str, int]
    by_department: dict[str, int]
    by_department_details: dict[str, DepartmentBreakdown]
    by_program: dict[str, int]
    average_age: int

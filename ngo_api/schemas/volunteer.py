"""Schemas for the volunteer registry."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, Field

from ngo_api.core.pagination import Pagination
from ngo_api.db.enums import VolunteerShift, VolunteerType


class VolunteerCreate(BaseModel):
    """total_hours is derived from entry_time and exit_time when omitted."""

    name: str = Field(..., min_length=2, max_length=255)
    volunteer_type: VolunteerType
    organization: str | None = Field(default=None, max_length=255)
    shift: VolunteerShift
    entry_time: time
    exit_time: time
    total_hours: float | None = Field(default=None, gt=0, le=24)
    work_date: date
    receives_benefit: bool = False
    benefit_number: str | None = Field(default=None, max_length=100)
    agricultural_pounds: float = Field(default=0, ge=0)
    unit_cost_q: float | None = Field(default=None, ge=0)
    unit_cost_usd: float | None = Field(default=None, ge=0)
    viveres_bags: int | None = Field(default=None, ge=0)
    average_cost_30lbs: float | None = Field(default=None, ge=0)
    picking_gtq: float | None = Field(default=None, ge=0)
    picking_5lbs: float | None = Field(default=None, ge=0)
    total_amount_q: float | None = Field(default=None, ge=0)
    group_number: int | None = Field(default=None, ge=1)
    department: str | None = Field(default=None, max_length=100)
    municipality: str | None = Field(default=None, max_length=100)
    village: str | None = Field(default=None, max_length=255)
    is_active: bool = True


class VolunteerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    volunteer_type: VolunteerType | None = None
    organization: str | None = Field(default=None, max_length=255)
    shift: VolunteerShift | None = None
    entry_time: time | None = None
    exit_time: time | None = None
    total_hours: float | None = Field(default=None, gt=0, le=24)
    work_date: date | None = None
    receives_benefit: bool | None = None
    benefit_number: str | None = Field(default=None, max_length=100)
    agricultural_pounds: float | None = Field(default=None, ge=0)
    unit_cost_q: float | None = Field(default=None, ge=0)
    unit_cost_usd: float | None = Field(default=None, ge=0)
    viveres_bags: int | None = Field(default=None, ge=0)
    average_cost_30lbs: float | None = Field(default=None, ge=0)
    picking_gtq: float | None = Field(default=None, ge=0)
    picking_5lbs: float | None = Field(default=None, ge=0)
    total_amount_q: float | None = Field(default=None, ge=0)
    group_number: int | None = Field(default=None, ge=1)
    department: str | None = Field(default=None, max_length=100)
    municipality: str | None = Field(default=None, max_length=100)
    village: str | None = Field(default=None, max_length=255)
    is_active: bool | None = None


class VolunteerRead(BaseModel):
    id: UUID
    name: str
    volunteer_type: str
    organization: str | None
    shift: str
    entry_time: time
    exit_time: time
    total_hours: float
    work_date: date
    receives_benefit: bool
    benefit_number: str | None
    agricultural_pounds: float
    unit_cost_q: float | None
    unit_cost_usd: float | None
    viveres_bags: int | None
    average_cost_30lbs: float | None
    picking_gtq: float | None
    picking_5lbs: float | None
    total_amount_q: float | None
    group_number: int | None
    department: str | None
    municipality: str | None
    village: str | None
    is_active: bool
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VolunteerListResponse(BaseModel):
    volunteers: list[VolunteerRead]
    pagination: Pagination


class WorkDateTotals(BaseModel):
    volunteers: int = 0
    hours: float = 0


class VolunteerRegistryStats(BaseModel):
    total: int
    active: int
    inactive: int
    total_hours: float
    total_with_benefit: int
    by_type: dict[str, int]
    by_organization: dict[str, int]
    by_shift: dict[str, int]
    by_date: dict[str, WorkDateTotals]

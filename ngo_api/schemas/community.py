"""Schemas for the community registry."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ngo_api.core.pagination import Pagination
from ngo_api.db.enums import CommunityClassification, CommunityStatus


class CommunityCreate(BaseModel):
    registration_date: date | None = None
    department: str = Field(..., min_length=1, max_length=100)
    municipality: str = Field(..., min_length=1, max_length=100)
    villages: str | None = None
    hamlets_served: str | None = None
    hamlets_count: int | None = Field(default=None, ge=0)
    google_maps_url: str | None = Field(default=None, max_length=1000)
    leader_name: str | None = Field(default=None, max_length=255)
    leader_phone: str | None = Field(default=None, max_length=50)
    is_in_leaders_group: bool = False
    community_committee: str | None = None
    status: CommunityStatus = CommunityStatus.ACTIVE
    inactive_reason: str | None = None
    total_families: int | None = Field(default=None, ge=0)
    families_in_ra: int | None = Field(default=None, ge=0)
    early_childhood_women: int = Field(default=0, ge=0)
    early_childhood_men: int = Field(default=0, ge=0)
    childhood_3_5_women: int = Field(default=0, ge=0)
    childhood_3_5_men: int = Field(default=0, ge=0)
    youth_6_10_women: int = Field(default=0, ge=0)
    youth_6_10_men: int = Field(default=0, ge=0)
    adults_11_18_women: int = Field(default=0, ge=0)
    adults_11_18_men: int = Field(default=0, ge=0)
    adults_19_60_women: int = Field(default=0, ge=0)
    adults_19_60_men: int = Field(default=0, ge=0)
    seniors_61_plus_women: int = Field(default=0, ge=0)
    seniors_61_plus_men: int = Field(default=0, ge=0)
    pregnant_women: int = Field(default=0, ge=0)
    lactating_women: int = Field(default=0, ge=0)
    placement_type: str | None = Field(default=None, max_length=255)
    has_whatsapp_group: bool = False
    classification: CommunityClassification | None = None
    storage_capacity: str | None = Field(default=None, max_length=255)
    placement_methods: str | None = None
    termination_date: date | None = None
    termination_reason: str | None = None
    photo_reference_url: str | None = Field(default=None, max_length=1000)


class CommunityUpdate(BaseModel):
    """Every field optional; only fields present in the body are applied."""

    registration_date: date | None = None
    department: str | None = Field(default=None, min_length=1, max_length=100)
    municipality: str | None = Field(default=None, min_length=1, max_length=100)
    villages: str | None = None
    hamlets_served: str | None = None
    hamlets_count: int | None = Field(default=None, ge=0)
    google_maps_url: str | None = Field(default=None, max_length=1000)
    leader_name: str | None = Field(default=None, max_length=255)
    leader_phone: str | None = Field(default=None, max_length=50)
    is_in_leaders_group: bool | None = None
    community_committee: str | None = None
    status: CommunityStatus | None = None
    inactive_reason: str | None = None
    total_families: int | None = Field(default=None, ge=0)
    families_in_ra: int | None = Field(default=None, ge=0)
    early_childhood_women: int | None = Field(default=None, ge=0)
    early_childhood_men: int | None = Field(default=None, ge=0)
    childhood_3_5_women: int | None = Field(default=None, ge=0)
    childhood_3_5_men: int | None = Field(default=None, ge=0)
    youth_6_10_women: int | None = Field(default=None, ge=0)
    youth_6_10_men: int | None = Field(default=None, ge=0)
    adults_11_18_women: int | None = Field(default=None, ge=0)
    adults_11_18_men: int | None = Field(default=None, ge=0)
    adults_19_60_women: int | None = Field(default=None, ge=0)
    adults_19_60_men: int | None = Field(default=None, ge=0)
    seniors_61_plus_women: int | None = Field(default=None, ge=0)
    seniors_61_plus_men: int | None = Field(default=None, ge=0)
    pregnant_women: int | None = Field(default=None, ge=0)
    lactating_women: int | None = Field(default=None, ge=0)
    placement_type: str | None = Field(default=None, max_length=255)
    has_whatsapp_group: bool | None = None
    classification: CommunityClassification | None = None
    storage_capacity: str | None = Field(default=None, max_length=255)
    placement_methods: str | None = None
    termination_date: date | None = None
    termination_reason: str | None = None
    photo_reference_url: str | None = Field(default=None, max_length=1000)


class CommunityRead(BaseModel):
    id: UUID
    registration_date: date | None
    department: str
    municipality: str
    villages: str | None
    hamlets_served: str | None
    hamlets_count: int | None
    google_maps_url: str | None
    leader_name: str | None
    leader_phone: str | None
    is_in_leaders_group: bool
    community_committee: str | None
    status: str
    inactive_reason: str | None
    total_families: int | None
    families_in_ra: int | None
    early_childhood_women: int
    early_childhood_men: int
    childhood_3_5_women: int
    childhood_3_5_men: int
    youth_6_10_women: int
    youth_6_10_men: int
    adults_11_18_women: int
    adults_11_18_men: int
    adults_19_60_women: int
    adults_19_60_men: int
    seniors_61_plus_women: int
    seniors_61_plus_men: int
    pregnant_women: int
    lactating_women: int
    placement_type: str | None
    has_whatsapp_group: bool
    classification: str | None
    storage_capacity: str | None
    placement_methods: str | None
    termination_date: date | None
    termination_reason: str | None
    photo_reference_url: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommunityListResponse(BaseModel):
    communities: list[CommunityRead]
    pagination: Pagination


class DepartmentCount(BaseModel):
    department: str
    count: int


class ClassificationCount(BaseModel):
    classification: str
    count: int


class CommunityStats(BaseModel):
    total: int
    active: int
    inactive: int
    suspended: int
    by_department: list[DepartmentCount]
    by_classification: list[ClassificationCount]
    total_families: int
    total_families_in_ra: int


class AgeGenderCount(BaseModel):
    age: str
    women: int
    men: int


class CommunityDemographics(BaseModel):
    total_communities: int
    active: int
    inactive: int
    suspended: int
    total_people: int
    by_age_gender: list[AgeGenderCount]
    total_families: int
    families_in_ra: int
    pregnant_women: int
    lactating_women: int

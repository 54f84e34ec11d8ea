"""Schemas for volunteer and audit board extras."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from ngo_api.db.enums import ConcludedResult, FollowUpStatus, TrafficLight


class VolunteerExtrasWrite(BaseModel):
    submission_id: UUID
    total_hours: float = Field(..., gt=0, le=24)
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


class VolunteerExtrasRead(BaseModel):
    id: UUID
    submission_id: UUID
    total_hours: float
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
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BoardExtrasWrite(BaseModel):
    submission_id: UUID
    traffic_light: TrafficLight | None = None
    recommendations: str | None = Field(default=None, max_length=10000)
    follow_up_given: FollowUpStatus | None = FollowUpStatus.NOT_STARTED
    follow_up_date: date | None = None
    concluded_result_red_or_no: ConcludedResult | None = None
    solutions: str | None = Field(default=None, max_length=10000)
    preliminary_report: HttpUrl | None = None
    full_report: HttpUrl | None = None

    @field_validator("recommendations", "solutions", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("preliminary_report", "full_report", mode="before")
    @classmethod
    def blank_url_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BoardExtrasRead(BaseModel):
    id: UUID
    submission_id: UUID
    traffic_light: str | None
    recommendations: str | None
    follow_up_given: str | None
    follow_up_date: date | None
    concluded_result_red_or_no: str | None
    solutions: str | None
    preliminary_report: str | None
    full_report: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BoardMonth(BaseModel):
    month: str
    rojo: int = 0
    amarillo: int = 0
    verde: int = 0


class BoardStats(BaseModel):
    total: int
    rojo: int
    amarillo: int
    verde: int
    sin_definir: int
    por_mes: list[BoardMonth]
    seguimiento: dict[str, int]
    concluidos: dict[str, int]


class VolunteerStats(BaseModel):
    total: int
    total_hours: float
    average_hours: float
    with_benefit: int
    agricultural_pounds: float
    viveres_bags: int
    total_amount_q: float

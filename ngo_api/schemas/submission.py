"""Schemas for form submissions and answers."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from ngo_api.core.pagination import Pagination


class AnswerWrite(BaseModel):
    question_id: UUID
    answer_value: Any = None


class SubmissionCreate(BaseModel):
    form_template_id: UUID
    answers: list[AnswerWrite]
    time_spent_seconds: int | None = Field(default=None, ge=0)


class PublicSubmissionCreate(BaseModel):
    answers: list[AnswerWrite]
    time_spent_seconds: int | None = Field(default=None, ge=0)


class SubmissionUpdate(BaseModel):
    answers: list[AnswerWrite] = Field(..., min_length=1)


class ProjectionRead(BaseModel):
    success: bool
    created: bool = False
    extras_table: str | None = None
    error: str | None = None


class SubmissionRead(BaseModel):
    id: UUID
    form_template_id: UUID
    section_location: str
    user_id: UUID | None
    status: str
    time_spent_seconds: int | None
    submitted_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AnswerRead(BaseModel):
    id: UUID
    question_id: UUID
    answer_value: dict
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SubmissionCreateResponse(BaseModel):
    submission: SubmissionRead
    answers: list[AnswerRead]
    extras: ProjectionRead


class TableColumn(BaseModel):
    id: UUID
    title: str
    type: str
    order_index: int


class SubmissionTable(BaseModel):
    form_id: UUID
    form_name: str
    section_location: str
    columns: list[TableColumn]
    data: list[dict[str, Any]]
    total: int


class PaginatedSubmissionTable(SubmissionTable):
    pagination: Pagination


class SubmissionCount(BaseModel):
    form_id: UUID
    count: int


class AnswerDetail(BaseModel):
    question_id: UUID
    question_title: str
    question_type: str
    order_index: int
    value: Any = None


class SubmissionDetail(BaseModel):
    form: dict[str, Any]
    submission: SubmissionRead
    user_name: str | None
    user_email: str | None
    answers: list[AnswerDetail]

"""Schemas for form templates, sections, questions, and options."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ngo_api.db.enums import FormSection


class QuestionTypeRead(BaseModel):
    id: UUID
    code: str
    name: str
    description: str | None = None
    validation_schema: dict | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# Write models
# =============================================================================

class QuestionOptionWrite(BaseModel):
    label: str = Field(..., min_length=1, max_length=500)
    value: str | None = Field(default=None, max_length=500)


class QuestionWrite(BaseModel):
    id: UUID | None = None
    question_type_id: UUID | None = None
    question_type_code: str | None = Field(default=None, max_length=50)
    title: str = Field(..., min_length=1, max_length=2000)
    help_text: str | None = Field(default=None, max_length=5000)
    is_required: bool = False
    config: dict | None = None
    options: list[QuestionOptionWrite] = Field(default_factory=list)


class FormSectionWrite(BaseModel):
    id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    questions: list[QuestionWrite] = Field(default_factory=list)


class FormCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    section_location: FormSection
    is_public: bool = False
    sections: list[FormSectionWrite] = Field(default_factory=list)


class FormUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    section_location: FormSection | None = None
    is_public: bool | None = None
    is_active: bool | None = None
    sections: list[FormSectionWrite] | None = None


# =============================================================================
# Read models
# =============================================================================

class QuestionOptionRead(BaseModel):
    id: UUID
    label: str
    value: str
    order_index: int

    model_config = {"from_attributes": True}


class QuestionRead(BaseModel):
    id: UUID
    section_id: UUID
    question_type: QuestionTypeRead
    title: str
    help_text: str | None
    is_required: bool
    order_index: int
    config: dict | None
    options: list[QuestionOptionRead]

    model_config = {"from_attributes": True}


class FormSectionRead(BaseModel):
    id: UUID
    title: str
    description: str | None
    order_index: int
    questions: list[QuestionRead]

    model_config = {"from_attributes": True}


class FormSummary(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None
    section_location: str
    version: int
    is_active: bool
    is_public: bool
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime
    submission_count: int = 0

    model_config = {"from_attributes": True}


class FormRead(FormSummary):
    sections: list[FormSectionRead]

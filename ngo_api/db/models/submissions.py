"""SQLAlchemy ORM models for form submissions and their answers."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ngo_api.db.base import Base
from ngo_api.db.enums import FormSubmissionStatus

if TYPE_CHECKING:
    from ngo_api.db.models import FormTemplate, Question, User


class FormSubmission(Base):
    """
    One filled-in response to a form template.

    section_location is copied from the template at submit time so section
    tables and statistics never need to join back through the template.
    user_id is null for anonymous public submissions.
    """

    __tablename__ = "form_submissions"
    __table_args__ = (
        Index("idx_form_submissions_template", "form_template_id"),
        Index("idx_form_submissions_section", "section_location"),
        Index("idx_form_submissions_submitted", "submitted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    form_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("form_templates.id", ondelete="CASCADE"), nullable=False
    )
    section_location: Mapped[str] = mapped_column(String(50), nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20), default=FormSubmissionStatus.COMPLETED.value, nullable=False
    )
    time_spent_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    form_template: Mapped["FormTemplate"] = relationship()
    user: Mapped["User | None"] = relationship()
    answers: Mapped[list["SubmissionAnswer"]] = relationship(
        back_populates="submission", cascade="all, delete-orphan"
    )


class SubmissionAnswer(Base):
    """
    Answer to one question of a submission.

    answer_value is an envelope: {"value": <typed value>}.
    """

    __tablename__ = "submission_answers"
    __table_args__ = (
        UniqueConstraint("submission_id", "question_id", name="uq_submission_answer"),
        Index("idx_submission_answers_question", "question_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("form_submissions.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    answer_value: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    submission: Mapped["FormSubmission"] = relationship(back_populates="answers")
    question: Mapped["Question"] = relationship()

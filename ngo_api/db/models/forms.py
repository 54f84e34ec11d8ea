"""SQLAlchemy ORM models for the dynamic form builder."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
    text,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ngo_api.db.base import Base


class QuestionType(Base):
    """Catalog of question kinds (TEXT, NUMBER, RADIO, ...)."""

    __tablename__ = "question_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    validation_schema: Mapped[dict | None] = mapped_column(JSON, nullable=True)


class FormTemplate(Base):
    """
    Named, versioned form schema.

    version is bumped whenever the section/question structure is replaced.
    is_active=false is a soft delete.
    """

    __tablename__ = "form_templates"
    __table_args__ = (
        Index("idx_form_templates_section", "section_location"),
        Index("idx_form_templates_active", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    section_location: Mapped[str] = mapped_column(String(50), nullable=False)
    version: Mapped[int] = mapped_column(
        Integer, default=1, server_default=text("1"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    sections: Mapped[list["FormSection"]] = relationship(
        back_populates="form_template",
        cascade="all, delete-orphan",
        order_by="FormSection.order_index",
    )
    questions: Mapped[list["Question"]] = relationship(
        back_populates="form_template",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
    )


class FormSection(Base):
    """Ordered group of questions inside a form template."""

    __tablename__ = "form_sections"
    __table_args__ = (Index("idx_form_sections_template", "form_template_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    form_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("form_templates.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_index: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )

    form_template: Mapped["FormTemplate"] = relationship(back_populates="sections")
    questions: Mapped[list["Question"]] = relationship(
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
    )


class Question(Base):
    """
    Single question of a form.

    config holds type-specific settings (min, max, step, maxLength,
    rows/columns for grids, labels for scales).
    """

    __tablename__ = "questions"
    __table_args__ = (
        Index("idx_questions_template", "form_template_id"),
        Index("idx_questions_section", "section_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    form_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("form_templates.id", ondelete="CASCADE"), nullable=False
    )
    section_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("form_sections.id", ondelete="CASCADE"), nullable=False
    )
    question_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("question_types.id", ondelete="RESTRICT"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    help_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_required: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    order_index: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    config: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    form_template: Mapped["FormTemplate"] = relationship(
        back_populates="questions"
    )
    section: Mapped["FormSection"] = relationship(
        back_populates="questions"
    )
    question_type: Mapped["QuestionType"] = relationship(lazy="joined")
    options: Mapped[list["QuestionOption"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="QuestionOption.order_index",
    )


class QuestionOption(Base):
    """Selectable option of a choice question."""

    __tablename__ = "question_options"
    __table_args__ = (Index("idx_question_options_question", "question_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    label: Mapped[str] = mapped_column(String(500), nullable=False)
    value: Mapped[str] = mapped_column(String(500), nullable=False)
    order_index: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )

    question: Mapped["Question"] = relationship(back_populates="options")

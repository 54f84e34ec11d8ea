"""SQLAlchemy ORM models for section-specific extras attached to submissions."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ngo_api.db.base import Base

if TYPE_CHECKING:
    from ngo_api.db.models import FormSubmission


class VolunteerExtras(Base):
    """Volunteering data (hours, benefits, food support) for one submission."""

    __tablename__ = "volunteer_extras"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("form_submissions.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    total_hours: Mapped[float] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=False)
    receives_benefit: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    benefit_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    agricultural_pounds: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), default=0, nullable=False
    )
    unit_cost_q: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    unit_cost_usd: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    viveres_bags: Mapped[int | None] = mapped_column(Integer, nullable=True)
    average_cost_30lbs: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    picking_gtq: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    picking_5lbs: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    total_amount_q: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    group_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    submission: Mapped["FormSubmission"] = relationship()


class BoardExtras(Base):
    """Consolidated audit board entry (traffic light and follow-up) for one submission."""

    __tablename__ = "consolidated_board_extras"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("form_submissions.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    traffic_light: Mapped[str | None] = mapped_column(String(20), nullable=True)
    recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_given: Mapped[str | None] = mapped_column(String(20), nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    concluded_result_red_or_no: Mapped[str | None] = mapped_column(String(5), nullable=True)
    solutions: Mapped[str | None] = mapped_column(Text, nullable=True)
    preliminary_report: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    full_report: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    submission: Mapped["FormSubmission"] = relationship()

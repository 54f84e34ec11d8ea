"""SQLAlchemy ORM model for the volunteer registry."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
    Uuid,
    false,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from ngo_api.db.base import Base


class Volunteer(Base):
    """
    One volunteering shift entered directly in the registry.

    Carries the same hours and food-support fields as volunteer_extras, plus
    who worked, when and where. Soft-deleted via deleted_at.
    """

    __tablename__ = "volunteers"
    __table_args__ = (
        Index("idx_volunteers_work_date", "work_date"),
        Index("idx_volunteers_deleted_at", "deleted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    volunteer_type: Mapped[str] = mapped_column(String(50), nullable=False)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    shift: Mapped[str] = mapped_column(String(50), nullable=False)
    entry_time: Mapped[time] = mapped_column(Time, nullable=False)
    exit_time: Mapped[time] = mapped_column(Time, nullable=False)
    total_hours: Mapped[float] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)

    receives_benefit: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    benefit_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    agricultural_pounds: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), default=0, server_default="0", nullable=False
    )
    unit_cost_q: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    unit_cost_usd: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    viveres_bags: Mapped[int | None] = mapped_column(Integer, nullable=True)
    average_cost_30lbs: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    picking_gtq: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    picking_5lbs: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    total_amount_q: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    group_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    municipality: Mapped[str | None] = mapped_column(String(100), nullable=True)
    village: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True)

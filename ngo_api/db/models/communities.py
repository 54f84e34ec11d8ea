"""SQLAlchemy ORM model for the community registry."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from ngo_api.db.base import Base

# (age label, women column, men column) in display order
DEMOGRAPHIC_COHORTS: tuple[tuple[str, str, str], ...] = (
    ("0-2", "early_childhood_women", "early_childhood_men"),
    ("3-5", "childhood_3_5_women", "childhood_3_5_men"),
    ("6-10", "youth_6_10_women", "youth_6_10_men"),
    ("11-18", "adults_11_18_women", "adults_11_18_men"),
    ("19-60", "adults_19_60_women", "adults_19_60_men"),
    ("60+", "seniors_61_plus_women", "seniors_61_plus_men"),
)


def _headcount() -> Mapped[int]:
    return mapped_column(Integer, default=0, server_default="0", nullable=False)


class Community(Base):
    """
    Community served by the food program, with its leadership and headcounts.

    Rows are soft-deleted via deleted_at; every query filters deleted_at IS NULL.
    """

    __tablename__ = "communities"
    __table_args__ = (
        CheckConstraint(
            "status IN ('activa', 'inactiva', 'suspendida')", name="ck_communities_status"
        ),
        Index("idx_communities_department", "department"),
        Index("idx_communities_status", "status"),
        Index("idx_communities_deleted_at", "deleted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Location
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    municipality: Mapped[str] = mapped_column(String(100), nullable=False)
    villages: Mapped[str | None] = mapped_column(Text, nullable=True)
    hamlets_served: Mapped[str | None] = mapped_column(Text, nullable=True)
    hamlets_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    google_maps_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Leadership
    leader_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    leader_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_in_leaders_group: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    community_committee: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), default="activa", server_default="activa", nullable=False
    )
    inactive_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    total_families: Mapped[int | None] = mapped_column(Integer, nullable=True)
    families_in_ra: Mapped[int | None] = mapped_column(Integer, nullable=True)

    early_childhood_women: Mapped[int] = _headcount()
    early_childhood_men: Mapped[int] = _headcount()
    childhood_3_5_women: Mapped[int] = _headcount()
    childhood_3_5_men: Mapped[int] = _headcount()
    youth_6_10_women: Mapped[int] = _headcount()
    youth_6_10_men: Mapped[int] = _headcount()
    adults_11_18_women: Mapped[int] = _headcount()
    adults_11_18_men: Mapped[int] = _headcount()
    adults_19_60_women: Mapped[int] = _headcount()
    adults_19_60_men: Mapped[int] = _headcount()
    seniors_61_plus_women: Mapped[int] = _headcount()
    seniors_61_plus_men: Mapped[int] = _headcount()
    pregnant_women: Mapped[int] = _headcount()
    lactating_women: Mapped[int] = _headcount()

    # Operation
    placement_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    has_whatsapp_group: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    classification: Mapped[str | None] = mapped_column(String(20), nullable=True)
    storage_capacity: Mapped[str | None] = mapped_column(String(255), nullable=True)
    placement_methods: Mapped[str | None] = mapped_column(Text, nullable=True)

    termination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    termination_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_reference_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True)

"""SQLAlchemy ORM model for program beneficiaries."""

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
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from ngo_api.db.base import Base


class Beneficiary(Base):
    """
    Person enrolled in one of the NGO programs.

    Rows are soft-deleted via deleted_at; every query filters deleted_at IS NULL.
    """

    __tablename__ = "beneficiaries"
    __table_args__ = (
        CheckConstraint("age > 0 AND age <= 120", name="ck_beneficiaries_age"),
        Index("idx_beneficiaries_department", "department"),
        Index("idx_beneficiaries_program", "program"),
        Index("idx_beneficiaries_deleted_at", "deleted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    dpi: Mapped[str | None] = mapped_column(String(13), nullable=True)
    program: Mapped[str] = mapped_column(String(255), nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    admission_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    municipality: Mapped[str] = mapped_column(String(100), nullable=False)
    village: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    google_maps_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    personal_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)
    personal_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    community_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)
    community_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True)

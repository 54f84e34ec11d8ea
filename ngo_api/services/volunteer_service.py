"""Volunteer service - shift registry CRUD with soft delete and dashboard statistics."""

import logging
import uuid
from collections import Counter
from datetime import date, datetime, time, timezone
from typing import Any

from sqlalchemy.orm import Session

from ngo_api.core.extras_mapping import calculate_hours_difference
from ngo_api.core.pagination import PaginationParams, paginate_query
from ngo_api.db.enums import VolunteerShift, VolunteerType
from ngo_api.db.models import Volunteer
from ngo_api.schemas.volunteer import VolunteerCreate, VolunteerUpdate
from ngo_api.services.registry_shared import apply_period_filter, null_required_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "name",
    "volunteer_type",
    "shift",
    "entry_time",
    "exit_time",
    "total_hours",
    "work_date",
    "receives_benefit",
    "agricultural_pounds",
    "is_active",
}


def _active_query(db: Session):
    return db.query(Volunteer).filter(Volunteer.deleted_at.is_(None))


def _enum_values(values: dict[str, Any]) -> dict[str, Any]:
    for field in ("volunteer_type", "shift"):
        if values.get(field) is not None:
            values[field] = values[field].value
    return values


def shift_hours(entry_time: time, exit_time: time) -> float:
    """
    Hours worked between entry and exit.

    Raises:
        ValueError: exit_time is not after entry_time
    """
    if exit_time <= entry_time:
        raise ValueError("exit_time must be after entry_time")
    return round(calculate_hours_difference(entry_time.isoformat(), exit_time.isoformat()), 2)


def list_volunteers(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    volunteer_type: VolunteerType | None = None,
    organization: str | None = None,
    shift: VolunteerShift | None = None,
    is_active: bool | None = None,
    work_date: date | None = None,
    year: int | None = None,
    month: int | None = None,
) -> tuple[list[Volunteer], int]:
    """Filtered page of shifts, latest work date first; year/month filter on created_at."""
    query = _active_query(db)
    if search:
        query = query.filter(Volunteer.name.ilike(f"%{search.strip()}%"))
    if volunteer_type:
        query = query.filter(Volunteer.volunteer_type == volunteer_type.value)
    if organization:
        query = query.filter(Volunteer.organization == organization)
    if shift:
        query = query.filter(Volunteer.shift == shift.value)
    if is_active is not None:
        query = query.filter(Volunteer.is_active.is_(is_active))
    if work_date:
        query = query.filter(Volunteer.work_date == work_date)
    query = apply_period_filter(query, Volunteer.created_at, year, month)
    query = query.order_by(Volunteer.work_date.desc(), Volunteer.created_at.desc(), Volunteer.id)
    return paginate_query(query, pagination)


def get_volunteer(db: Session, volunteer_id: uuid.UUID) -> Volunteer | None:
    return _active_query(db).filter(Volunteer.id == volunteer_id).first()


def create_volunteer(
    db: Session, data: VolunteerCreate, user_id: uuid.UUID | None
) -> Volunteer:
    """
    Register a shift; total_hours defaults to the entry/exit difference.

    Raises:
        ValueError: exit_time is not after entry_time
    """
    values = _enum_values(data.model_dump())
    hours = shift_hours(data.entry_time, data.exit_time)
    if values["total_hours"] is None:
        values["total_hours"] = hours
    volunteer = Volunteer(**values, created_by=user_id)
    db.add(volunteer)
    db.commit()
    db.refresh(volunteer)
    logger.info("Volunteer shift created", extra={"volunteer_id": str(volunteer.id)})
    return volunteer


def update_volunteer(db: Session, volunteer: Volunteer, data: VolunteerUpdate) -> Volunteer:
    """
    Partial update. Moving entry/exit time recomputes total_hours unless the
    body sets it explicitly.

    Raises:
        ValueError: Required field set to null, or exit_time not after entry_time
    """
    changes = data.model_dump(exclude_unset=True)
    nulled = null_required_fields(changes, REQUIRED_FIELDS)
    if nulled:
        raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")

    if "entry_time" in changes or "exit_time" in changes:
        hours = shift_hours(
            changes.get("entry_time", volunteer.entry_time),
            changes.get("exit_time", volunteer.exit_time),
        )
        changes.setdefault("total_hours", hours)

    for field, value in _enum_values(changes).items():
        setattr(volunteer, field, value)
    volunteer.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(volunteer)
    return volunteer


def soft_delete_volunteer(db: Session, volunteer: Volunteer) -> None:
    volunteer.deleted_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("Volunteer shift deleted", extra={"volunteer_id": str(volunteer.id)})


def volunteer_registry_stats(db: Session) -> dict[str, Any]:
    """Totals, hours, and breakdowns by type, organization, shift and work date."""
    rows = _active_query(db).all()
    by_date: dict[str, dict[str, float]] = {}
    for v in rows:
        totals = by_date.setdefault(v.work_date.isoformat(), {"volunteers": 0, "hours": 0})
        totals["volunteers"] += 1
        totals["hours"] = round(totals["hours"] + (v.total_hours or 0), 2)

    return {
        "total": len(rows),
        "active": sum(1 for v in rows if v.is_active),
        "inactive": sum(1 for v in rows if not v.is_active),
        "total_hours": round(sum(v.total_hours or 0 for v in rows), 2),
        "total_with_benefit": sum(1 for v in rows if v.receives_benefit),
        "by_type": dict(Counter(v.volunteer_type for v in rows)),
        "by_organization": dict(Counter(v.organization for v in rows if v.organization)),
        "by_shift": dict(Counter(v.shift for v in rows)),
        "by_date": by_date,
    }

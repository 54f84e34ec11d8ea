"""Beneficiary service - CRUD with soft delete and dashboard statistics."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from ngo_api.db.enums import Gender
from ngo_api.db.models import Beneficiary
from ngo_api.schemas.beneficiary import BeneficiaryCreate, BeneficiaryUpdate
from ngo_api.services.registry_shared import null_required_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "name",
    "age",
    "gender",
    "program",
    "admission_date",
    "is_active",
    "department",
    "municipality",
}


def _active_query(db: Session):
    return db.query(Beneficiary).filter(Beneficiary.deleted_at.is_(None))


def list_beneficiaries(
    db: Session,
    department: str | None = None,
    municipality: str | None = None,
    program: str | None = None,
    is_active: bool | None = None,
    search: str | None = None,
) -> list[Beneficiary]:
    query = _active_query(db)
    if department:
        query = query.filter(Beneficiary.department == department)
    if municipality:
        query = query.filter(Beneficiary.municipality == municipality)
    if program:
        query = query.filter(Beneficiary.program == program)
    if is_active is not None:
        query = query.filter(Beneficiary.is_active.is_(is_active))
    if search:
        query = query.filter(Beneficiary.name.ilike(f"%{search.strip()}%"))
    return query.order_by(Beneficiary.created_at.desc(), Beneficiary.name).all()


def get_beneficiary(db: Session, beneficiary_id: uuid.UUID) -> Beneficiary | None:
    return _active_query(db).filter(Beneficiary.id == beneficiary_id).first()


def create_beneficiary(
    db: Session, data: BeneficiaryCreate, user_id: uuid.UUID | None
) -> Beneficiary:
    values = data.model_dump()
    values["gender"] = data.gender.value
    beneficiary = Beneficiary(**values, created_by=user_id)
    db.add(beneficiary)
    db.commit()
    db.refresh(beneficiary)
    logger.info("Beneficiary created", extra={"beneficiary_id": str(beneficiary.id)})
    return beneficiary


def update_beneficiary(
    db: Session, beneficiary: Beneficiary, data: BeneficiaryUpdate
) -> Beneficiary:
    """
    Partial update: only fields present in the request body change.

    Raises:
        ValueError: A required field was explicitly set to null
    """
    changes = data.model_dump(exclude_unset=True)
    nulled = null_required_fields(changes, REQUIRED_FIELDS)
    if nulled:
        raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
    for field, value in changes.items():
        if field == "gender":
            value = Gender(value).value
        setattr(beneficiary, field, value)
    db.commit()
    db.refresh(beneficiary)
    return beneficiary


def soft_delete_beneficiary(db: Session, beneficiary: Beneficiary) -> None:
    beneficiary.deleted_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("Beneficiary deleted", extra={"beneficiary_id": str(beneficiary.id)})


def beneficiary_stats(db: Session) -> dict[str, Any]:
    """Totals, gender split, department breakdown (gender + program), programs, average age."""
    rows = _active_query(db).all()
    stats: dict[str, Any] = {
        "total": len(rows),
        "active": sum(1 for b in rows if b.is_active),
        "inactive": sum(1 for b in rows if not b.is_active),
        "by_gender": {"masculino": 0, "femenino": 0},
        "by_department": {},
        "by_department_details": {},
        "by_program": {},
        "average_age": 0,
    }
    if not rows:
        return stats

    gender_keys = {Gender.MALE.value: "masculino", Gender.FEMALE.value: "femenino"}
    for b in rows:
        gender_key = gender_keys.get(b.gender)
        if gender_key:
            stats["by_gender"][gender_key] += 1

        stats["by_department"][b.department] = stats["by_department"].get(b.department, 0) + 1
        details = stats["by_department_details"].setdefault(
            b.department, {"total": 0, "masculino": 0, "femenino": 0, "programs": {}}
        )
        details["total"] += 1
        if gender_key:
            details[gender_key] += 1
        details["programs"][b.program] = details["programs"].get(b.program, 0) + 1

        stats["by_program"][b.program] = stats["by_program"].get(b.program, 0) + 1

    stats["average_age"] = round(sum(b.age for b in rows) / len(rows))
    return stats

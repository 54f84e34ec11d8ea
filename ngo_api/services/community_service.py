"""Community service - registry CRUD with soft delete, stats and demographics."""

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ngo_api.core.pagination import PaginationParams, paginate_query
from ngo_api.db.enums import CommunityStatus
from ngo_api.db.models import Community
from ngo_api.db.models.communities import DEMOGRAPHIC_COHORTS
from ngo_api.schemas.community import CommunityCreate, CommunityUpdate
from ngo_api.services.registry_shared import apply_period_filter, null_required_fields

logger = logging.getLogger(__name__)

HEADCOUNT_FIELDS = {
    column for _, women, men in DEMOGRAPHIC_COHORTS for column in (women, men)
} | {"pregnant_women", "lactating_women"}

REQUIRED_FIELDS = {
    "department",
    "municipality",
    "status",
    "is_in_leaders_group",
    "has_whatsapp_group",
} | HEADCOUNT_FIELDS


def _active_query(db: Session):
    return db.query(Community).filter(Community.deleted_at.is_(None))


def _enum_values(values: dict[str, Any]) -> dict[str, Any]:
    for field in ("status", "classification"):
        if values.get(field) is not None:
            values[field] = values[field].value
    return values


def list_communities(
    db: Session,
    pagination: PaginationParams,
    department: str | None = None,
    municipality: str | None = None,
    status: CommunityStatus | None = None,
    classification: str | None = None,
    search: str | None = None,
    year: int | None = None,
    month: int | None = None,
) -> tuple[list[Community], int]:
    """
    Filtered page of communities, newest first.

    search matches villages or leader name; year/month filter on created_at.
    """
    query = _active_query(db)
    if department:
        query = query.filter(Community.department == department)
    if municipality:
        query = query.filter(Community.municipality == municipality)
    if status:
        query = query.filter(Community.status == status.value)
    if classification:
        query = query.filter(Community.classification == classification)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(Community.villages.ilike(pattern), Community.leader_name.ilike(pattern))
        )
    query = apply_period_filter(query, Community.created_at, year, month)
    query = query.order_by(Community.created_at.desc(), Community.id)
    return paginate_query(query, pagination)


def get_community(db: Session, community_id: uuid.UUID) -> Community | None:
    return _active_query(db).filter(Community.id == community_id).first()


def create_community(
    db: Session, data: CommunityCreate, user_id: uuid.UUID | None
) -> Community:
    community = Community(**_enum_values(data.model_dump()), created_by=user_id)
    db.add(community)
    db.commit()
    db.refresh(community)
    logger.info("Community created", extra={"community_id": str(community.id)})
    return community


def update_community(db: Session, community: Community, data: CommunityUpdate) -> Community:
    """
    Partial update: only fields present in the request body change.

    Raises:
        ValueError: A required field was explicitly set to null
    """
    changes = data.model_dump(exclude_unset=True)
    nulled = null_required_fields(changes, REQUIRED_FIELDS)
    if nulled:
        raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
    for field, value in _enum_values(changes).items():
        setattr(community, field, value)
    community.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(community)
    return community


def soft_delete_community(db: Session, community: Community) -> None:
    community.deleted_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("Community deleted", extra={"community_id": str(community.id)})


def _status_counts(rows: list[Community]) -> dict[str, int]:
    counts = Counter(c.status for c in rows)
    return {
        "active": counts[CommunityStatus.ACTIVE.value],
        "inactive": counts[CommunityStatus.INACTIVE.value],
        "suspended": counts[CommunityStatus.SUSPENDED.value],
    }


def community_stats(db: Session) -> dict[str, Any]:
    """Status totals, department and size breakdowns, family totals."""
    rows = _active_query(db).all()
    departments = Counter(c.department for c in rows)
    classifications = Counter(c.classification for c in rows if c.classification)
    return {
        "total": len(rows),
        **_status_counts(rows),
        "by_department": [
            {"department": name, "count": count} for name, count in departments.most_common()
        ],
        "by_classification": [
            {"classification": name, "count": count}
            for name, count in classifications.most_common()
        ],
        "total_families": sum(c.total_families or 0 for c in rows),
        "total_families_in_ra": sum(c.families_in_ra or 0 for c in rows),
    }


def community_demographics(db: Session) -> dict[str, Any]:
    """Headcounts by age cohort and gender across all registered communities."""
    rows = _active_query(db).all()
    by_age_gender = []
    for label, women_field, men_field in DEMOGRAPHIC_COHORTS:
        by_age_gender.append(
            {
                "age": label,
                "women": sum(getattr(c, women_field) for c in rows),
                "men": sum(getattr(c, men_field) for c in rows),
            }
        )
    return {
        "total_communities": len(rows),
        **_status_counts(rows),
        "total_people": sum(row["women"] + row["men"] for row in by_age_gender),
        "by_age_gender": by_age_gender,
        "total_families": sum(c.total_families or 0 for c in rows),
        "families_in_ra": sum(c.families_in_ra or 0 for c in rows),
        "pregnant_women": sum(c.pregnant_women for c in rows),
        "lactating_women": sum(c.lactating_women for c in rows),
    }

"""Extras service: submission projection, manual upserts, and board/volunteer stats.

Extras rows are 1:1 with submissions and always written with upsert-by-submission_id:
update when a row exists, insert otherwise.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ngo_api.core.extras_mapping import AnswerList, build_extras_values, get_extras_mapping
from ngo_api.core.structured_logging import build_log_context
from ngo_api.db.enums import ConcludedResult, ExtrasKind, FollowUpStatus, TrafficLight
from ngo_api.db.models import BoardExtras, FormSubmission, VolunteerExtras

logger = logging.getLogger(__name__)

EXTRAS_MODELS: dict[ExtrasKind, type[VolunteerExtras] | type[BoardExtras]] = {
    ExtrasKind.VOLUNTEER: VolunteerExtras,
    ExtrasKind.BOARD: BoardExtras,
}

BOARD_MONTHS = 6


@dataclass
class ProjectionResult:
    success: bool
    created: bool = False
    extras_table: str | None = None
    error: str | None = None


# =============================================================================
# Upsert
# =============================================================================

def _upsert(
    db: Session, kind: ExtrasKind, submission_id: uuid.UUID, values: dict[str, Any]
) -> tuple[VolunteerExtras | BoardExtras, bool]:
    model = EXTRAS_MODELS[kind]
    columns = set(model.__table__.columns.keys()) - {"id", "submission_id", "created_at", "updated_at"}
    unknown = set(values) - columns
    if unknown:
        raise ValueError(f"Unknown {kind.value} fields: {', '.join(sorted(unknown))}")

    row = db.query(model).filter(model.submission_id == submission_id).first()
    created = row is None
    if created:
        row = model(submission_id=submission_id)
        db.add(row)
    for name, value in values.items():
        setattr(row, name, value)
    db.flush()
    return row, created


def project_submission_extras(
    db: Session,
    form_template_id: uuid.UUID | str,
    submission_id: uuid.UUID,
    answers: AnswerList,
) -> ProjectionResult:
    """
    Write the extras row a registered form template maps to.

    Runs inside a SAVEPOINT of the caller's transaction: on failure only the
    extras write is rolled back and the failure is reported, the submission stays.
    Not retried. The caller commits.
    """
    mapping = get_extras_mapping(str(form_template_id))
    if mapping is None:
        return ProjectionResult(success=True)

    table = mapping.extras_table.value
    try:
        values = build_extras_values(mapping, answers)
        with db.begin_nested():
            _, created = _upsert(db, mapping.extras_table, submission_id, values)
    except (ValueError, TypeError, SQLAlchemyError) as exc:
        logger.warning(
            "Extras projection failed",
            extra={
                **build_log_context(
                    form_template_id=str(form_template_id),
                    submission_id=str(submission_id),
                ),
                "extras_table": table,
                "error": str(exc),
            },
        )
        return ProjectionResult(success=False, extras_table=table, error=str(exc))

    return ProjectionResult(success=True, created=created, extras_table=table)


def upsert_volunteer_extras(
    db: Session, submission_id: uuid.UUID, values: dict[str, Any]
) -> tuple[VolunteerExtras, bool]:
    row, created = _upsert(db, ExtrasKind.VOLUNTEER, submission_id, values)
    db.commit()
    db.refresh(row)
    return row, created


def upsert_board_extras(
    db: Session, submission_id: uuid.UUID, values: dict[str, Any]
) -> tuple[BoardExtras, bool]:
    row, created = _upsert(db, ExtrasKind.BOARD, submission_id, values)
    db.commit()
    db.refresh(row)
    return row, created


def get_extras(db: Session, kind: ExtrasKind, submission_id: uuid.UUID):
    model = EXTRAS_MODELS[kind]
    return db.query(model).filter(model.submission_id == submission_id).first()


# =============================================================================
# Stats
# =============================================================================

def _recent_months(now: datetime, count: int) -> list[str]:
    """Labels "YYYY-MM" for the last `count` months, oldest first, ending at now."""
    year, month = now.year, now.month
    labels = []
    for _ in range(count):
        labels.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    return list(reversed(labels))


def board_stats(
    db: Session, now: datetime | None = None, form_id: uuid.UUID | None = None
) -> dict[str, Any]:
    """Traffic-light totals, follow-up and concluded breakdowns, monthly series."""
    query = db.query(BoardExtras, FormSubmission.submitted_at).join(
        FormSubmission, FormSubmission.id == BoardExtras.submission_id
    )
    if form_id is not None:
        query = query.filter(FormSubmission.form_template_id == form_id)
    rows = query.all()

    def count(predicate) -> int:
        return sum(1 for extras, _ in rows if predicate(extras))

    months = _recent_months(now or datetime.now(timezone.utc), BOARD_MONTHS)
    series = {label: {"month": label, "rojo": 0, "amarillo": 0, "verde": 0} for label in months}
    light_keys = {
        TrafficLight.RED.value: "rojo",
        TrafficLight.YELLOW.value: "amarillo",
        TrafficLight.GREEN.value: "verde",
    }
    for extras, submitted_at in rows:
        if submitted_at is None or extras.traffic_light not in light_keys:
            continue
        label = f"{submitted_at.year:04d}-{submitted_at.month:02d}"
        if label in series:
            series[label][light_keys[extras.traffic_light]] += 1

    return {
        "total": len(rows),
        "rojo": count(lambda e: e.traffic_light == TrafficLight.RED.value),
        "amarillo": count(lambda e: e.traffic_light == TrafficLight.YELLOW.value),
        "verde": count(lambda e: e.traffic_light == TrafficLight.GREEN.value),
        "sin_definir": count(lambda e: not e.traffic_light),
        "por_mes": [series[label] for label in months],
        "seguimiento": {
            "no_iniciado": count(lambda e: e.follow_up_given == FollowUpStatus.NOT_STARTED.value),
            "en_proceso": count(lambda e: e.follow_up_given == FollowUpStatus.IN_PROGRESS.value),
            "completado": count(lambda e: e.follow_up_given == FollowUpStatus.COMPLETED.value),
            "sin_definir": count(lambda e: not e.follow_up_given),
        },
        "concluidos": {
            "si": count(lambda e: e.concluded_result_red_or_no == ConcludedResult.YES.value),
            "no": count(lambda e: e.concluded_result_red_or_no == ConcludedResult.NO.value),
            "sin_definir": count(lambda e: not e.concluded_result_red_or_no),
        },
    }


def volunteer_stats(db: Session, form_id: uuid.UUID | None = None) -> dict[str, Any]:
    query = db.query(
        func.count(VolunteerExtras.id),
        func.coalesce(func.sum(VolunteerExtras.total_hours), 0),
        func.coalesce(
            func.sum(case((VolunteerExtras.receives_benefit.is_(True), 1), else_=0)), 0
        ),
        func.coalesce(func.sum(VolunteerExtras.agricultural_pounds), 0),
        func.coalesce(func.sum(VolunteerExtras.viveres_bags), 0),
        func.coalesce(func.sum(VolunteerExtras.total_amount_q), 0),
    ).select_from(VolunteerExtras)
    if form_id is not None:
        query = query.join(
            FormSubmission, FormSubmission.id == VolunteerExtras.submission_id
        ).filter(FormSubmission.form_template_id == form_id)
    total, total_hours, with_benefit, pounds, bags, amount = query.one()
    total = int(total or 0)
    total_hours = float(total_hours or 0)
    return {
        "total": total,
        "total_hours": round(total_hours, 2),
        "average_hours": round(total_hours / total, 2) if total else 0.0,
        "with_benefit": int(with_benefit or 0),
        "agricultural_pounds": round(float(pounds or 0), 2),
        "viveres_bags": int(bags or 0),
        "total_amount_q": round(float(amount or 0), 2),
    }

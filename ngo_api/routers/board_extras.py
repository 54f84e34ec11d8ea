"""Consolidated audit board: traffic light, follow-up and reports per audit submission."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_section
from ngo_api.core.sections import SectionKey, get_section_views
from ngo_api.db.enums import ExtrasKind
from ngo_api.schemas.extras import BoardExtrasRead, BoardExtrasWrite, BoardStats
from ngo_api.services import extras_service, submission_service

router = APIRouter(
    prefix="/board-extras",
    tags=["extras"],
    dependencies=[Depends(require_section(SectionKey.AUDITORIAS_TABLERO_CONSOLIDADO))],
)


def _board_values(body: BoardExtrasWrite) -> dict:
    values = body.model_dump(exclude={"submission_id"})
    for field in ("traffic_light", "follow_up_given", "concluded_result_red_or_no"):
        if values[field] is not None:
            values[field] = values[field].value
    for field in ("preliminary_report", "full_report"):
        if values[field] is not None:
            values[field] = str(values[field])
    return values


@router.post("", response_model=BoardExtrasRead, dependencies=[Depends(require_csrf_header)])
def upsert_board_extras(body: BoardExtrasWrite, db: Session = Depends(get_db)):
    """Create or update the board row of an audit submission."""
    submission = submission_service.get_submission_by_id(db, body.submission_id)
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    views = get_section_views(submission.section_location)
    if views is None or views.extras != ExtrasKind.BOARD:
        raise HTTPException(status_code=400, detail="Submission does not belong to an audit form")

    try:
        row, _ = extras_service.upsert_board_extras(db, body.submission_id, _board_values(body))
    except ValueError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return row


@router.get("/stats", response_model=BoardStats)
def get_board_stats(db: Session = Depends(get_db)):
    """Traffic-light totals, follow-up and concluded breakdowns, last six months."""
    return extras_service.board_stats(db)


@router.get("/{submission_id}", response_model=BoardExtrasRead)
def get_board_extras(submission_id: UUID, db: Session = Depends(get_db)):
    row = extras_service.get_extras(db, ExtrasKind.BOARD, submission_id)
    if not row:
        raise HTTPException(status_code=404, detail="Board extras not found")
    return row

"""Beneficiaries of the Abrazando Leyendas program."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db, require_csrf_header, require_section
from ngo_api.core.sections import SectionKey
from ngo_api.schemas.auth import UserSession
from ngo_api.schemas.beneficiary import (
    BeneficiaryCreate,
    BeneficiaryListResponse,
    BeneficiaryRead,
    BeneficiaryStats,
    BeneficiaryUpdate,
)
from ngo_api.services import beneficiary_service

router = APIRouter(prefix="/beneficiaries", tags=["beneficiaries"])

require_program_section = require_section(SectionKey.ABRAZANDO_LEYENDAS)


def _get_beneficiary_or_404(db: Session, beneficiary_id: UUID):
    beneficiary = beneficiary_service.get_beneficiary(db, beneficiary_id)
    if not beneficiary:
        raise HTTPException(status_code=404, detail="Beneficiary not found")
    return beneficiary


@router.get(
    "",
    response_model=BeneficiaryListResponse,
    dependencies=[Depends(require_program_section)],
)
def list_beneficiaries(
    department: str | None = Query(default=None, max_length=100),
    municipality: str | None = Query(default=None, max_length=100),
    program: str | None = Query(default=None, max_length=255),
    is_active: bool | None = Query(default=None),
    search: str | None = Query(default=None, max_length=255),
    db: Session = Depends(get_db),
):
    rows = beneficiary_service.list_beneficiaries(
        db,
        department=department,
        municipality=municipality,
        program=program,
        is_active=is_active,
        search=search,
    )
    return {"beneficiaries": rows, "total": len(rows)}


@router.get(
    "/stats",
    response_model=BeneficiaryStats,
    dependencies=[Depends(require_program_section)],
)
def get_beneficiary_stats(db: Session = Depends(get_db)):
    return beneficiary_service.beneficiary_stats(db)


@router.post(
    "",
    response_model=BeneficiaryRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_beneficiary(
    body: BeneficiaryCreate,
    session: UserSession = Depends(require_program_section),
    db: Session = Depends(get_db),
):
    return beneficiary_service.create_beneficiary(db, body, session.user_id)


@router.get(
    "/{beneficiary_id}",
    response_model=BeneficiaryRead,
    dependencies=[Depends(require_program_section)],
)
def get_beneficiary(beneficiary_id: UUID, db: Session = Depends(get_db)):
    return _get_beneficiary_or_404(db, beneficiary_id)


@router.put(
    "/{beneficiary_id}",
    response_model=BeneficiaryRead,
    dependencies=[Depends(require_program_section), Depends(require_csrf_header)],
)
def update_beneficiary(
    beneficiary_id: UUID,
    body: BeneficiaryUpdate,
    db: Session = Depends(get_db),
):
    """Partial update: omitted fields keep their value."""
    beneficiary = _get_beneficiary_or_404(db, beneficiary_id)
    try:
        return beneficiary_service.update_beneficiary(db, beneficiary, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete(
    "/{beneficiary_id}",
    dependencies=[Depends(require_program_section), Depends(require_csrf_header)],
)
def delete_beneficiary(beneficiary_id: UUID, db: Session = Depends(get_db)):
    beneficiary = _get_beneficiary_or_404(db, beneficiary_id)
    beneficiary_service.soft_delete_beneficiary(db, beneficiary)
    return {"deleted": True, "id": str(beneficiary_id)}

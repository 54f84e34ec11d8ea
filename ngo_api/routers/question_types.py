"""Question type catalog (public, read-only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ngo_api.core.deps import get_db
from ngo_api.schemas.forms import QuestionTypeRead
from ngo_api.services import question_type_service

router = APIRouter(prefix="/question-types", tags=["question-types"])


@router.get("", response_model=list[QuestionTypeRead])
def list_question_types(db: Session = Depends(get_db)):
    return question_type_service.list_question_types(db)

"""Form builder endpoints: forms and their questions."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.db.models import Form, User
from app.schemas.auth import MessageResponse
from app.schemas.forms import (
    FormCreate,
    FormCreateResponse,
    FormDetailResponse,
    FormListResponse,
    QuestionCreate,
    QuestionCreateResponse,
)
from app.services import form_service

router = APIRouter(prefix="/forms", tags=["forms"])

FORM_NOT_FOUND = "Form not found"
FORBIDDEN = "Forbidden access"


def _load_form(db: Session, slug: str) -> Form:
    try:
        return form_service.require_form(db, slug)
    except form_service.FormNotFoundError:
        raise HTTPException(status_code=404, detail=FORM_NOT_FOUND)


# =============================================================================
# Forms
# =============================================================================

@router.post("", response_model=FormCreateResponse)
def create_form(
    data: FormCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        form = form_service.create_form(db, user, data)
    except form_service.DuplicateSlugError:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Invalid field",
                "errors": {"slug": ["The slug has already been taken."]},
            },
        )
    return {"message": "Create form success", "form": form_service.form_to_dict(form)}


@router.get("", response_model=FormListResponse)
def list_forms(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    forms = form_service.list_forms_for_user(db, user)
    return {
        "message": "Get all forms success",
        "forms": [form_service.form_to_dict(f) for f in forms],
    }


@router.get("/{slug}", response_model=FormDetailResponse)
def get_form(
    slug: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)
    return {
        "message": "Get form success",
        "form": form_service.form_to_dict(form, include_details=True),
    }


@router.delete("/{slug}", response_model=MessageResponse)
def delete_form(
    slug: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)
    try:
        form_service.delete_form(db, form, user)
    except form_service.FormAccessDeniedError:
        raise HTTPException(status_code=403, detail=FORBIDDEN)
    return MessageResponse(message="Remove form success")


# =============================================================================
# Questions
# =============================================================================

@router.post("/{slug}/questions", response_model=QuestionCreateResponse)
def add_question(
    slug: str,
    data: QuestionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)
    try:
        question = form_service.add_question(db, form, user, data)
    except form_service.FormAccessDeniedError:
        raise HTTPException(status_code=403, detail=FORBIDDEN)
    return {
        "message": "Add question success",
        "question": form_service.question_to_dict(question),
    }


@router.delete("/{slug}/questions/{question_id}", response_model=MessageResponse)
def delete_question(
    slug: str,
    question_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)
    try:
        form_service.delete_question(db, form, user, question_id)
    except form_service.FormAccessDeniedError:
        raise HTTPException(status_code=403, detail=FORBIDDEN)
    except form_service.QuestionNotFoundError:
        raise HTTPException(status_code=404, detail="Question not found")
    return MessageResponse(message="Remove question success")

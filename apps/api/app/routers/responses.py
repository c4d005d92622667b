"""Response endpoints: submitting a form and reading its responses."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_current_user, get_db
from app.core.rate_limit import limiter
from app.db.models import Form, User
from app.schemas.auth import MessageResponse, UserRead
from app.schemas.responses import ResponseListResponse, ResponseRead, ResponseSubmit
from app.services import form_service, response_report_service, response_service
from app.services.answer_validation_service import AnswerValidationError
from app.services.form_service import FormAccessDeniedError

router = APIRouter(prefix="/forms/{slug}/responses", tags=["responses"])


def _load_form(db: Session, slug: str) -> Form:
    try:
        return form_service.require_form(db, slug)
    except form_service.FormNotFoundError:
        raise HTTPException(status_code=404, detail="Form not found")


@router.post("", response_model=MessageResponse)
@limiter.limit(f"{settings.RATE_LIMIT_SUBMISSIONS}/minute")
def submit_response(
    request: Request,
    slug: str,
    data: ResponseSubmit,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)

    try:
        response_service.submit_response(db, form, user, data.answers)
    except response_service.AlreadySubmittedError:
        raise HTTPException(status_code=422, detail="You can not submit form twice")
    except response_service.DomainForbiddenError:
        raise HTTPException(status_code=403, detail="Forbidden access")
    except AnswerValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid field", "errors": exc.errors},
        )
    except response_service.ResponsePersistenceError:
        raise HTTPException(status_code=500, detail="Failed to submit response")

    return MessageResponse(message="Submit response success")


@router.get("", response_model=ResponseListResponse)
def list_responses(
    slug: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = _load_form(db, slug)

    try:
        report = response_report_service.build_report(db, form, user)
    except FormAccessDeniedError:
        raise HTTPException(status_code=403, detail="Forbidden access")

    return ResponseListResponse(
        message="Get responses success",
        responses=[
            ResponseRead(
                date=r.date,
                user=UserRead(id=r.user_id, name=r.user_name, email=r.user_email),
                answers=r.answers_by_name(),
            )
            for r in report
        ],
    )

"""Response service - admit, validate, and persist form submissions."""

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.structured_logging import build_log_context
from app.db.enums import SubmissionDenial
from app.db.models import Answer, Form, Response, User
from app.schemas.responses import AnswerSubmission
from app.services import answer_validation_service, submission_eligibility_service
from app.services.answer_validation_service import ValidatedAnswer

logger = logging.getLogger(__name__)


class ResponseServiceError(Exception):
    """Base exception for response service errors."""

    pass


class AlreadySubmittedError(ResponseServiceError):
    """User already responded to a one-response form."""

    pass


class DomainForbiddenError(ResponseServiceError):
    """User's email domain is not allowed on this form."""

    pass


class ResponsePersistenceError(ResponseServiceError):
    """Storage failed while writing the response; nothing was kept."""

    pass


DENIAL_ERRORS: dict[SubmissionDenial, type[ResponseServiceError]] = {
    SubmissionDenial.ALREADY_SUBMITTED: AlreadySubmittedError,
    SubmissionDenial.DOMAIN_FORBIDDEN: DomainForbiddenError,
}


def submit_response(
    db: Session,
    form: Form,
    user: User,
    answers: Sequence[AnswerSubmission] | None,
) -> Response:
    """
    Run a submission through eligibility, validation, and the write.

    `form` must come from form_service.get_form_by_slug so its questions
    and allowed domains are the snapshot validated against.

    Raises:
        AlreadySubmittedError / DomainForbiddenError: eligibility denied
        AnswerValidationError: answers failed validation
        ResponsePersistenceError: write failed and was rolled back
    """
    denial = submission_eligibility_service.evaluate(db, form, user)
    if denial is not None:
        logger.info(
            "response_denied",
            extra={**build_log_context(user_id=user.id, form_id=form.id), "reason": denial.value},
        )
        raise DENIAL_ERRORS[denial](denial.value)

    validated = answer_validation_service.validate_answers(form.questions, answers)
    return write_response(db, form, user, validated)


def write_response(
    db: Session,
    form: Form,
    user: User,
    validated: Sequence[ValidatedAnswer],
) -> Response:
    """
    Persist one Response and its Answers in a single transaction.

    On failure everything is rolled back. A uniqueness conflict on a
    one-response form becomes AlreadySubmittedError.
    """
    form_id, user_id = form.id, user.id
    limited = form.limit_one_response
    response = Response(
        form_id=form_id,
        user_id=user_id,
        limited_user_id=user_id if limited else None,
        date=datetime.now(timezone.utc),
        answers=[Answer(question_id=a.question_id, value=a.value) for a in validated],
    )
    try:
        db.add(response)
        db.flush()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if limited and submission_eligibility_service.has_existing_response(db, form_id, user_id):
            logger.info(
                "response_conflict",
                extra=build_log_context(user_id=user_id, form_id=form_id),
            )
            raise AlreadySubmittedError(SubmissionDenial.ALREADY_SUBMITTED.value)
        logger.error(
            "response_write_failed",
            extra=build_log_context(user_id=user_id, form_id=form_id),
            exc_info=True,
        )
        raise ResponsePersistenceError("Failed to store response")

    db.refresh(response)
    logger.info(
        "response_submitted",
        extra={
            **build_log_context(user_id=user_id, form_id=form_id, response_id=response.id),
            "answer_count": len(validated),
        },
    )
    return response

"""Decide whether a user may submit a response to a form."""

from sqlalchemy.orm import Session

from app.db.enums import SubmissionDenial
from app.db.models import Form, Response, User


def email_domain(email: str) -> str:
    """Return the text after the last '@' (empty when there is none)."""
    _, at, domain = email.rpartition("@")
    return domain if at else ""


def has_existing_response(db: Session, form_id: int, user_id: int) -> bool:
    return (
        db.query(Response.id)
        .filter(Response.form_id == form_id, Response.user_id == user_id)
        .first()
        is not None
    )


def evaluate(db: Session, form: Form, user: User) -> SubmissionDenial | None:
    """
    Check submission policy for a (form, user) pair.

    The duplicate check runs first, then the domain check; the first
    failing check is returned. None means the user may submit.
    Read-only.
    """
    if form.limit_one_response and has_existing_response(db, form.id, user.id):
        return SubmissionDenial.ALREADY_SUBMITTED

    allowed = form.domain_names
    if allowed and email_domain(user.email) not in allowed:
        return SubmissionDenial.DOMAIN_FORBIDDEN

    return None

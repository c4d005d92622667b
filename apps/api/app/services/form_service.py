"""Form service - CRUD for forms, questions, and allowed domains."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.db.models import AllowedDomain, Form, Question, User
from app.schemas.forms import FormCreate, QuestionCreate

logger = logging.getLogger(__name__)


class FormServiceError(Exception):
    """Base exception for form service errors."""

    pass


class FormNotFoundError(FormServiceError):
    """No form with this slug."""

    pass


class FormAccessDeniedError(FormServiceError):
    """Caller does not own the form."""

    pass


class QuestionNotFoundError(FormServiceError):
    """Question does not exist on this form."""

    pass


class DuplicateSlugError(FormServiceError):
    """Slug already used by another form."""

    pass


# =============================================================================
# Forms
# =============================================================================


def get_form_by_slug(db: Session, slug: str) -> Form | None:
    """Load a form with its questions and allowed domains in one fetch."""
    return (
        db.query(Form)
        .options(selectinload(Form.questions), selectinload(Form.allowed_domains))
        .filter(Form.slug == slug)
        .first()
    )


def require_form(db: Session, slug: str) -> Form:
    """Like get_form_by_slug, but raises FormNotFoundError for an unknown slug."""
    form = get_form_by_slug(db, slug)
    if not form:
        raise FormNotFoundError(slug)
    return form


def ensure_owner(form: Form, user: User) -> None:
    if form.creator_id != user.id:
        raise FormAccessDeniedError(form.slug)


def list_forms_for_user(db: Session, user: User) -> list[Form]:
    """List forms created by the user, oldest first."""
    return (
        db.query(Form)
        .filter(Form.creator_id == user.id)
        .order_by(Form.id)
        .all()
    )


def create_form(db: Session, user: User, data: FormCreate) -> Form:
    """
    Create a form and its allowed domains.

    Raises:
        DuplicateSlugError: slug is taken
    """
    if db.query(Form.id).filter(Form.slug == data.slug).first():
        raise DuplicateSlugError(data.slug)

    form = Form(
        name=data.name.strip(),
        slug=data.slug,
        description=data.description,
        limit_one_response=data.limit_one_response,
        creator_id=user.id,
        allowed_domains=[AllowedDomain(domain=d) for d in data.allowed_domains],
    )
    try:
        db.add(form)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateSlugError(data.slug)
    db.refresh(form)
    logger.info("form_created", extra={"user_id": user.id, "form_id": form.id})
    return form


def delete_form(db: Session, form: Form, user: User) -> None:
    """Delete a form; questions, domains, responses and answers go with it."""
    ensure_owner(form, user)
    form_id = form.id
    db.delete(form)
    db.commit()
    logger.info("form_deleted", extra={"user_id": user.id, "form_id": form_id})


# =============================================================================
# Questions
# =============================================================================


def add_question(db: Session, form: Form, user: User, data: QuestionCreate) -> Question:
    """Append a question to a form the caller owns."""
    ensure_owner(form, user)
    question = Question(
        form_id=form.id,
        name=data.name.strip(),
        choice_type=data.choice_type.value,
        choices=data.choices,
        is_required=data.is_required,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def delete_question(db: Session, form: Form, user: User, question_id: int) -> None:
    """
    Remove a question and every answer recorded against it.

    Raises:
        FormAccessDeniedError: caller is not the creator
        QuestionNotFoundError: question is not on this form
    """
    ensure_owner(form, user)
    question = (
        db.query(Question)
        .filter(Question.id == question_id, Question.form_id == form.id)
        .first()
    )
    if not question:
        raise QuestionNotFoundError(question_id)
    db.delete(question)
    db.commit()


# =============================================================================
# Serialization
# =============================================================================


def question_to_dict(question: Question) -> dict:
    return {
        "id": question.id,
        "form_id": question.form_id,
        "name": question.name,
        "choice_type": question.choice_type,
        "choices": question.choices,
        "is_required": question.is_required,
    }


def form_to_dict(form: Form, include_details: bool = False) -> dict:
    data = {
        "id": form.id,
        "name": form.name,
        "slug": form.slug,
        "description": form.description,
        "limit_one_response": form.limit_one_response,
        "creator_id": form.creator_id,
    }
    if include_details:
        data["allowed_domains"] = form.domain_names
        data["questions"] = [question_to_dict(q) for q in form.questions]
    return data

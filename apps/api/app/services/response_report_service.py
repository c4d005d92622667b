"""Owner-facing report of a form's responses."""

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session, selectinload

from app.db.models import Answer, Form, Response, User
from app.services.form_service import ensure_owner


@dataclass(frozen=True)
class ReportedAnswer:
    question_id: int
    question_name: str
    value: str | None


@dataclass(frozen=True)
class ReportedResponse:
    response_id: int
    date: datetime
    user_id: int
    user_name: str
    user_email: str
    answers: list[ReportedAnswer] = field(default_factory=list)

    def answers_by_name(self) -> dict[str, str | None]:
        """Render answers keyed by question name; a later answer wins on a shared name."""
        return {a.question_name: a.value for a in self.answers}


def build_report(db: Session, form: Form, user: User) -> list[ReportedResponse]:
    """
    Return every response to `form`, oldest first.

    Raises:
        FormAccessDeniedError: caller is not the form's creator
    """
    ensure_owner(form, user)

    responses = (
        db.query(Response)
        .options(
            selectinload(Response.user),
            selectinload(Response.answers).selectinload(Answer.question),
        )
        .filter(Response.form_id == form.id)
        .order_by(Response.date, Response.id)
        .all()
    )

    return [
        ReportedResponse(
            response_id=r.id,
            date=r.date,
            user_id=r.user.id,
            user_name=r.user.name,
            user_email=r.user.email,
            answers=[
                ReportedAnswer(
                    question_id=a.question_id,
                    question_name=a.question.name,
                    value=a.value,
                )
                for a in r.answers
            ],
        )
        for r in responses
    ]

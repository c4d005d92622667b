"""Validate submitted answers against a form's questions."""

from dataclasses import dataclass
from typing import Iterable, Sequence

from app.db.models import Question
from app.schemas.responses import AnswerSubmission


class AnswerValidationError(Exception):
    """Submitted answers failed validation; `errors` maps field -> messages."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("Invalid field")
        self.errors = errors


@dataclass(frozen=True)
class ValidatedAnswer:
    question_id: int
    value: str | None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def collect_answer_errors(
    questions: Iterable[Question],
    answers: Sequence[AnswerSubmission] | None,
) -> dict[str, list[str]]:
    """
    Return every violation as a field -> [messages] mapping.

    Questions are matched by id. A required question needs a non-blank
    value, and one left out of the submission entirely is reported under
    the `answers` key.
    """
    if not answers:
        return {"answers": ["The answers field is required."]}

    by_id = {q.id: q for q in questions}
    errors: dict[str, list[str]] = {}
    seen: set[int] = set()

    for i, answer in enumerate(answers):
        key = f"answers.{i}.question_id"
        if answer.question_id is None:
            errors.setdefault(key, []).append(f"The {key} field is required.")
            continue
        question = by_id.get(answer.question_id)
        if question is None:
            errors.setdefault(key, []).append(f"The selected {key} is invalid.")
            continue
        if answer.question_id in seen:
            errors.setdefault(key, []).append(f"The {key} field has a duplicate value.")
            continue
        seen.add(answer.question_id)

        if question.is_required and _is_blank(answer.value):
            value_key = f"answers.{i}.value"
            errors.setdefault(value_key, []).append(f"The {value_key} field is required.")

    for question in by_id.values():
        if question.is_required and question.id not in seen:
            errors.setdefault("answers", []).append(
                f'The answer for question "{question.name}" is required.'
            )

    return errors


def validate_answers(
    questions: Iterable[Question],
    answers: Sequence[AnswerSubmission] | None,
) -> list[ValidatedAnswer]:
    """
    Validate a submission and return answers ready to persist.

    Raises:
        AnswerValidationError: one or more violations (all collected)
    """
    questions = list(questions)
    errors = collect_answer_errors(questions, answers)
    if errors:
        raise AnswerValidationError(errors)
    return [ValidatedAnswer(question_id=a.question_id, value=a.value) for a in answers]

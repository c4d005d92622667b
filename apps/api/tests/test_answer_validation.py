"""Tests for answer validation against a form's questions."""

import pytest

from app.db.models import Question
from app.schemas.responses import AnswerSubmission
from app.services.answer_validation_service import (
    AnswerValidationError,
    ValidatedAnswer,
    collect_answer_errors,
    validate_answers,
)


def _questions():
    return [
        Question(id=10, name="Name", choice_type="short_answer", is_required=True),
        Question(id=11, name="Stack", choice_type="checkboxes", choices=["a", "b"], is_required=False),
        Question(id=12, name="Bio", choice_type="paragraph", is_required=True),
    ]


def _answers(*pairs):
    return [AnswerSubmission(question_id=qid, value=value) for qid, value in pairs]


def test_valid_submission_preserves_values():
    answers = _answers((10, "Ana"), (11, None), (12, "Hello"))
    assert validate_answers(_questions(), answers) == [
        ValidatedAnswer(10, "Ana"),
        ValidatedAnswer(11, None),
        ValidatedAnswer(12, "Hello"),
    ]


@pytest.mark.parametrize("answers", [None, []])
def test_answers_required(answers):
    assert collect_answer_errors(_questions(), answers) == {
        "answers": ["The answers field is required."]
    }


def test_question_id_required_and_must_belong_to_form():
    errors = collect_answer_errors(
        _questions(),
        _answers((None, "x"), (99, "y"), (10, "Ana"), (12, "Bio")),
    )
    assert errors == {
        "answers.0.question_id": ["The answers.0.question_id field is required."],
        "answers.1.question_id": ["The selected answers.1.question_id is invalid."],
    }


def test_duplicate_question_id_rejected():
    errors = collect_answer_errors(
        _questions(),
        _answers((10, "Ana"), (10, "Again"), (12, "Bio")),
    )
    assert errors == {
        "answers.1.question_id": ["The answers.1.question_id field has a duplicate value."],
    }


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_question_needs_non_blank_value(value):
    errors = collect_answer_errors(_questions(), _answers((10, value), (12, "Bio")))
    assert errors == {"answers.0.value": ["The answers.0.value field is required."]}


def test_requiredness_is_matched_by_id_not_position():
    # Optional question first: the required one sits at index 1
    errors = collect_answer_errors(
        _questions(),
        _answers((11, ""), (10, ""), (12, "Bio")),
    )
    assert errors == {"answers.1.value": ["The answers.1.value field is required."]}


def test_omitted_required_question_is_reported():
    errors = collect_answer_errors(_questions(), _answers((11, "a")))
    assert errors == {
        "answers": [
            'The answer for question "Name" is required.',
            'The answer for question "Bio" is required.',
        ]
    }


def test_all_violations_accumulate():
    with pytest.raises(AnswerValidationError) as exc_info:
        validate_answers(_questions(), _answers((None, "x"), (10, " "), (77, "y")))

    errors = exc_info.value.errors
    assert set(errors) == {
        "answers.0.question_id",
        "answers.1.value",
        "answers.2.question_id",
        "answers",
    }
    assert errors["answers"] == ['The answer for question "Bio" is required.']


def test_optional_questions_may_be_omitted():
    questions = _questions()[:2]
    assert validate_answers(questions, _answers((10, "Ana"))) == [ValidatedAnswer(10, "Ana")]

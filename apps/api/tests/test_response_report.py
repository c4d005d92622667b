"""Tests for the owner-facing response report."""

from datetime import datetime, timedelta

import pytest

from app.db.models import Response
from app.services import response_report_service, response_service
from app.services.answer_validation_service import ValidatedAnswer
from app.services.form_service import FormAccessDeniedError


def test_report_is_ordered_and_keyed_by_question_id(db, scenario_form, owner, make_user):
    q1, q2 = scenario_form.questions
    early = make_user("early@corp.com")
    late = make_user("late@corp.com")

    late_response = response_service.write_response(
        db, scenario_form, late, [ValidatedAnswer(q1.id, "second")]
    )
    early_response = response_service.write_response(
        db, scenario_form, early, [ValidatedAnswer(q1.id, "first"), ValidatedAnswer(q2.id, "a")]
    )
    # Backdate so insertion order and date order disagree
    early_response.date = late_response.date - timedelta(minutes=5)
    db.commit()

    report = response_report_service.build_report(db, scenario_form, owner)

    assert [r.user_email for r in report] == ["early@corp.com", "late@corp.com"]
    assert [(a.question_id, a.question_name, a.value) for a in report[0].answers] == [
        (q1.id, "Q1", "first"),
        (q2.id, "Q2", "a"),
    ]
    assert report[1].answers_by_name() == {"Q1": "second"}


def test_report_ties_on_date_fall_back_to_id(db, make_form, owner, make_user):
    form = make_form("ties")
    users = [make_user(f"u{i}@corp.com") for i in range(3)]
    stamp = datetime(2024, 1, 1, 12, 0, 0)
    for user in users:
        response_service.write_response(db, form, user, [])
    db.query(Response).update({Response.date: stamp})
    db.commit()

    report = response_report_service.build_report(db, form, owner)
    assert [r.user_email for r in report] == ["u0@corp.com", "u1@corp.com", "u2@corp.com"]


def test_report_is_idempotent(db, scenario_form, owner, make_user):
    q1 = scenario_form.questions[0]
    response_service.write_response(db, scenario_form, make_user("u1@corp.com"), [ValidatedAnswer(q1.id, "hi")])

    assert response_report_service.build_report(db, scenario_form, owner) == (
        response_report_service.build_report(db, scenario_form, owner)
    )


def test_report_requires_owner(db, scenario_form, make_user):
    with pytest.raises(FormAccessDeniedError):
        response_report_service.build_report(db, scenario_form, make_user("u1@corp.com"))


def test_shared_question_names_keep_both_answers_by_id(db, make_form, owner, make_user):
    form = make_form(
        "dupes",
        questions=[
            {"name": "Color", "choice_type": "short_answer"},
            {"name": "Color", "choice_type": "short_answer"},
        ],
    )
    first, second = form.questions
    response_service.write_response(
        db,
        form,
        make_user("u1@corp.com"),
        [ValidatedAnswer(first.id, "red"), ValidatedAnswer(second.id, "blue")],
    )

    (reported,) = response_report_service.build_report(db, form, owner)
    assert [(a.question_id, a.value) for a in reported.answers] == [
        (first.id, "red"),
        (second.id, "blue"),
    ]
    # Name rendering keeps the later answer
    assert reported.answers_by_name() == {"Color": "blue"}

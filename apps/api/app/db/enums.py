"""Enum definitions for application constants."""

from enum import Enum


class ChoiceType(str, Enum):
    """
    Answer types a question can collect.

    Selection types (multiple_choice, dropdown, checkboxes) carry an
    ordered list of choices; the rest accept free input.
    """
    SHORT_ANSWER = "short_answer"
    PARAGRAPH = "paragraph"
    DATE = "date"
    TIME = "time"
    MULTIPLE_CHOICE = "multiple_choice"
    DROPDOWN = "dropdown"
    CHECKBOXES = "checkboxes"


CHOICE_TYPES_WITH_CHOICES = frozenset({
    ChoiceType.MULTIPLE_CHOICE,
    ChoiceType.DROPDOWN,
    ChoiceType.CHECKBOXES,
})


class SubmissionDenial(str, Enum):
    """Reasons a respondent may not submit a response to a form."""
    ALREADY_SUBMITTED = "already_submitted"
    DOMAIN_FORBIDDEN = "domain_forbidden"

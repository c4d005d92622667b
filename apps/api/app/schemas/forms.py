"""Schemas for forms, questions, and allowed domains."""

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.db.enums import CHOICE_TYPES_WITH_CHOICES, ChoiceType


SLUG_PATTERN = r"^[A-Za-z0-9_-]+$"


class FormCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: str = Field(..., min_length=1)
    allowed_domains: list[str] = Field(default_factory=list)
    limit_one_response: bool = False

    @field_validator("allowed_domains")
    @classmethod
    def strip_domains(cls, domains: list[str]) -> list[str]:
        # Lower-cased like registered emails; keep first-seen order, drop blanks and repeats
        cleaned: list[str] = []
        for domain in domains:
            domain = domain.strip().lower()
            if domain and domain not in cleaned:
                cleaned.append(domain)
        return cleaned


class QuestionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    choice_type: ChoiceType
    choices: list[str] | None = Field(default=None, validate_default=True)
    is_required: bool = False

    @field_validator("choices")
    @classmethod
    def choices_for_selection_types(
        cls, choices: list[str] | None, info: ValidationInfo
    ) -> list[str] | None:
        choice_type = info.data.get("choice_type")
        if choice_type is None:
            # choice_type already failed validation
            return choices
        if choice_type not in CHOICE_TYPES_WITH_CHOICES:
            return None
        cleaned = [c.strip() for c in choices or [] if c.strip()]
        if not cleaned:
            raise ValueError(
                f"The choices field is required when choice type is {choice_type.value}."
            )
        return cleaned


class QuestionRead(BaseModel):
    id: int
    form_id: int
    name: str
    choice_type: str
    choices: list[str] | None = None
    is_required: bool


class FormRead(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    limit_one_response: bool
    creator_id: int


class FormDetailRead(FormRead):
    allowed_domains: list[str]
    questions: list[QuestionRead]


class FormCreateResponse(BaseModel):
    message: str
    form: FormRead


class FormListResponse(BaseModel):
    message: str
    forms: list[FormRead]


class FormDetailResponse(BaseModel):
    message: str
    form: FormDetailRead


class QuestionCreateResponse(BaseModel):
    message: str
    question: QuestionRead

"""SQLAlchemy ORM models for users, forms, questions, and responses."""

from datetime import datetime

from sqlalchemy import (
    JSON, Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint, false, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


# =============================================================================
# Auth Models
# =============================================================================

class User(Base):
    """
    A registered account.

    Users own forms and submit responses. `token_version` is bumped on
    logout so every previously issued access token stops validating.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    token_version: Mapped[int] = mapped_column(
        Integer, default=1, server_default="1", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), nullable=False
    )

    forms: Mapped[list["Form"]] = relationship(
        back_populates="creator", cascade="all, delete-orphan", passive_deletes=True
    )


# =============================================================================
# Form Builder Models
# =============================================================================

class Form(Base):
    """
    A named collection of questions plus its submission policy.

    Deleting a form cascades to its questions, allowed domains,
    responses and their answers.
    """
    __tablename__ = "forms"
    __table_args__ = (
        Index("idx_forms_creator", "creator_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    limit_one_response: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    creator_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    creator: Mapped["User"] = relationship(back_populates="forms")
    questions: Mapped[list["Question"]] = relationship(
        back_populates="form",
        order_by="Question.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    allowed_domains: Mapped[list["AllowedDomain"]] = relationship(
        back_populates="form", cascade="all, delete-orphan", passive_deletes=True
    )
    responses: Mapped[list["Response"]] = relationship(
        back_populates="form", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def domain_names(self) -> list[str]:
        return [d.domain for d in self.allowed_domains]


class Question(Base):
    """A typed prompt on a form."""
    __tablename__ = "questions"
    __table_args__ = (
        Index("idx_questions_form", "form_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    form_id: Mapped[int] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    choice_type: Mapped[str] = mapped_column(String(30), nullable=False)
    # Only set for selection types
    choices: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    is_required: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    form: Mapped["Form"] = relationship(back_populates="questions")


class AllowedDomain(Base):
    """Email domain allowed to respond to a form."""
    __tablename__ = "allowed_domains"
    __table_args__ = (
        Index("idx_allowed_domains_form", "form_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    form_id: Mapped[int] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE"), nullable=False
    )
    domain: Mapped[str] = mapped_column(String(255), nullable=False)

    form: Mapped["Form"] = relationship(back_populates="allowed_domains")


# =============================================================================
# Response Models
# =============================================================================

class Response(Base):
    """
    One respondent's submission of a form.

    `limited_user_id` mirrors `user_id` only when the form limits
    respondents to a single response. The unique constraint on
    (form_id, limited_user_id) then rejects a second row for the same
    user, while NULLs keep unlimited forms open to repeat submissions.
    """
    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("form_id", "limited_user_id", name="uq_responses_form_limited_user"),
        Index("idx_responses_form", "form_id"),
        Index("idx_responses_form_user", "form_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    form_id: Mapped[int] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    limited_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date: Mapped[datetime] = mapped_column(nullable=False)

    form: Mapped["Form"] = relationship(back_populates="responses")
    user: Mapped["User"] = relationship()
    answers: Mapped[list["Answer"]] = relationship(
        back_populates="response",
        order_by="Answer.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Answer(Base):
    """One question's recorded value within a response."""
    __tablename__ = "answers"
    __table_args__ = (
        Index("idx_answers_response", "response_id"),
        Index("idx_answers_question", "question_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    response_id: Mapped[int] = mapped_column(
        ForeignKey("responses.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    response: Mapped["Response"] = relationship(back_populates="answers")
    question: Mapped["Question"] = relationship()

"""Schemas for response submission and the owner's response report."""

from datetime import datetime

from pydantic import BaseModel

from app.schemas.auth import UserRead


class AnswerSubmission(BaseModel):
    # Both optional here so missing keys surface as per-entry answer errors
    question_id: int | None = None
    value: str | None = None


class ResponseSubmit(BaseModel):
    answers: list[AnswerSubmission] | None = None


class ResponseRead(BaseModel):
    date: datetime
    user: UserRead
    answers: dict[str, str | None]


class ResponseListResponse(BaseModel):
    message: str
    responses: list[ResponseRead]

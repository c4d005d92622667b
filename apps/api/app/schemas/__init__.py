"""Pydantic schemas for API request/response models."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserRead,
)
from app.schemas.forms import (
    FormCreate,
    FormCreateResponse,
    FormDetailRead,
    FormDetailResponse,
    FormListResponse,
    FormRead,
    QuestionCreate,
    QuestionCreateResponse,
    QuestionRead,
)
from app.schemas.responses import (
    AnswerSubmission,
    ResponseListResponse,
    ResponseRead,
    ResponseSubmit,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserRead",
    # Forms
    "FormCreate",
    "FormCreateResponse",
    "FormDetailRead",
    "FormDetailResponse",
    "FormListResponse",
    "FormRead",
    "QuestionCreate",
    "QuestionCreateResponse",
    "QuestionRead",
    # Responses
    "AnswerSubmission",
    "ResponseListResponse",
    "ResponseRead",
    "ResponseSubmit",
]

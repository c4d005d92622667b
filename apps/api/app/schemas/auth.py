"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.config import settings


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value: str) -> str:
        if len(value) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"The password field must be at least {settings.PASSWORD_MIN_LENGTH} characters."
            )
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Public view of a user (never includes credentials)."""
    id: int
    name: str
    email: str


class RegisterResponse(BaseModel):
    message: str
    data: UserRead


class LoginUser(BaseModel):
    name: str
    email: str
    accessToken: str


class LoginResponse(BaseModel):
    message: str
    user: LoginUser


class MessageResponse(BaseModel):
    message: str

"""Authentication router: registration, login, and token revocation."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_current_user, get_db
from app.db.models import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserRead,
)
from app.services import auth_service

# Rate limiting
from app.core.rate_limit import limiter

router = APIRouter()


def _user_read(user: User) -> UserRead:
    return UserRead(id=user.id, name=user.name, email=user.email)


# =============================================================================
# Credentials
# =============================================================================

@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(f"{settings.RATE_LIMIT_AUTH}/minute")
def register(request: Request, data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = auth_service.register_user(db, data.name, data.email, data.password)
    except auth_service.EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Invalid field",
                "errors": {"email": ["The email has already been taken."]},
            },
        )
    return RegisterResponse(message="Register success", data=_user_read(user))


@router.post("/login", response_model=LoginResponse)
@limiter.limit(f"{settings.RATE_LIMIT_AUTH}/minute")
def login(request: Request, data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.authenticate(db, data.email, data.password)
    except auth_service.InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Email or password incorrect")
    return LoginResponse(
        message="Login success",
        user=LoginUser(name=user.name, email=user.email, accessToken=token),
    )


# =============================================================================
# Session
# =============================================================================

@router.post("/logout", response_model=MessageResponse)
def logout(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Revoke every token issued to the caller."""
    auth_service.revoke_all_tokens(db, user)
    return MessageResponse(message="Logout success")


@router.get("/me", response_model=UserRead)
def me(user: User = Depends(get_current_user)):
    return _user_read(user)

"""FastAPI dependencies for authentication and database access."""

from typing import Generator

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.db.session import SessionLocal


AUTH_HEADER = "Authorization"
AUTH_SCHEME = "bearer"
UNAUTHENTICATED = "Unauthenticated."


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get(AUTH_HEADER)
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != AUTH_SCHEME or not token.strip():
        return None
    return token.strip()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get authenticated user from the bearer token.

    Validates:
    - Authorization header carries a bearer token
    - JWT is valid and not expired
    - User exists
    - Token version matches (for logout/revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from app.db.models import User

    token = _bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail=UNAUTHENTICATED)

    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail=UNAUTHENTICATED)

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail=UNAUTHENTICATED)

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise HTTPException(status_code=401, detail=UNAUTHENTICATED)

    return user

"""Auth service - registration, credential checks, and token revocation."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import create_access_token, hash_password, verify_password
from app.db.models import User

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base exception for auth service errors."""

    pass


class EmailAlreadyRegisteredError(AuthServiceError):
    """Another account already uses this email."""

    pass


class InvalidCredentialsError(AuthServiceError):
    """Email/password pair did not match an account."""

    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user by email (case-insensitive)."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """
    Create a new account.

    Raises:
        EmailAlreadyRegisteredError: email is taken
    """
    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise EmailAlreadyRegisteredError(email)

    user = User(name=name.strip(), email=email, password_hash=hash_password(password))
    try:
        db.add(user)
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise EmailAlreadyRegisteredError(email)
    db.refresh(user)
    logger.info("user_registered", extra={"user_id": user.id})
    return user


def authenticate(db: Session, email: str, password: str) -> tuple[User, str]:
    """
    Verify credentials and issue an access token.

    Returns:
        (user, access_token)

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    token = create_access_token(user.id, user.token_version)
    logger.info("user_logged_in", extra={"user_id": user.id})
    return user, token


def revoke_all_tokens(db: Session, user: User) -> None:
    """
    Revoke every token issued to a user by bumping token_version.

    Existing tokens with the old version fail validation.
    """
    user.token_version += 1
    db.commit()
    logger.info("user_logged_out", extra={"user_id": user.id})

"""
Test configuration and fixtures.

Provides:
- In-memory SQLite session with the schema created/dropped per test
- Users and JWT bearer tokens for authenticated tests
- HTTPX AsyncClient fixtures with the get_db dependency overridden
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator, Callable, Generator

# Must be set before app modules read settings
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ.setdefault("JWT_SECRET", "test-secret-for-formbuilder-api-0123456789")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

from app.main import app
from app.core.deps import get_db
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.enums import ChoiceType
from app.db.models import AllowedDomain, Form, Question, User
from app.db.session import engine, SessionLocal


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Creates a fresh schema and session for each test.

    The engine shares one in-memory connection, so app code that commits
    is visible to the test and dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    """Factory for persisted users; password defaults to 'password1'."""
    def _make(email: str, name: str | None = None, password: str = "password1") -> User:
        user = User(
            name=name or email.split("@")[0],
            email=email,
            password_hash=hash_password(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture(scope="function")
def owner(make_user) -> User:
    return make_user("owner@corp.com", name="Form Owner")


@pytest.fixture(scope="function")
def make_form(db: Session, owner: User) -> Callable[..., Form]:
    """Factory for forms owned by `owner` (unless another creator is passed)."""
    def _make(
        slug: str = "survey",
        *,
        creator: User | None = None,
        domains: list[str] | None = None,
        limit_one_response: bool = False,
        questions: list[dict] | None = None,
    ) -> Form:
        form = Form(
            name=slug.replace("-", " ").title(),
            slug=slug,
            description="Test form",
            limit_one_response=limit_one_response,
            creator_id=(creator or owner).id,
            allowed_domains=[AllowedDomain(domain=d) for d in domains or []],
            questions=[Question(**q) for q in questions or []],
        )
        db.add(form)
        db.commit()
        db.refresh(form)
        return form

    return _make


@pytest.fixture(scope="function")
def scenario_form(make_form) -> Form:
    """
    Q1 required short answer, Q2 optional checkboxes;
    corp.com only, one response per user.
    """
    return make_form(
        "team-survey",
        domains=["corp.com"],
        limit_one_response=True,
        questions=[
            {
                "name": "Q1",
                "choice_type": ChoiceType.SHORT_ANSWER.value,
                "is_required": True,
            },
            {
                "name": "Q2",
                "choice_type": ChoiceType.CHECKBOXES.value,
                "choices": ["a", "b"],
                "is_required": False,
            },
        ],
    )


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def _auth_for(user: User) -> TestAuth:
    return TestAuth(user=user, token=create_access_token(user.id, user.token_version))


@pytest.fixture(scope="function")
def test_auth(owner: User) -> TestAuth:
    """Bearer token for the form owner."""
    return _auth_for(owner)


@pytest.fixture(scope="function")
def auth_for() -> Callable[[User], TestAuth]:
    """Mint bearer auth for any user."""
    return _auth_for


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    test_auth: TestAuth
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient authenticated as the form owner.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=test_auth.headers,
    ) as c:
        yield c

    app.dependency_overrides.clear()

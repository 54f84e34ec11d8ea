"""
Test configuration and fixtures.

Provides:
- Fresh in-memory SQLite schema per test (roles and question types seeded)
- Admin, editor and viewer users with session tokens
- HTTPX AsyncClient over ASGITransport (anonymous, cookie + CSRF, bearer)
- A form factory for building templates directly in the database
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Settings are read at import time: point them at SQLite and disable rate limits
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "1"
os.environ.setdefault("ENV", "dev")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from ngo_api.core.deps import COOKIE_NAME, get_db
from ngo_api.core.security import create_session_token
from ngo_api.db.base import Base
from ngo_api.db.enums import Role
from ngo_api.db.models import (
    FormSection,
    FormTemplate,
    Question,
    QuestionOption,
    QuestionType,
    User,
)
from ngo_api.db.session import SessionLocal, engine
from ngo_api.main import app
from ngo_api.services import auth_service, question_type_service, user_service

CSRF_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
TEST_PASSWORD = "secreto123"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Creates the schema on the shared in-memory connection and yields a session.

    Roles and the question type catalog are seeded; everything is dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    auth_service.ensure_roles(session)
    question_type_service.seed_question_types(session)

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


def _create_user(db: Session, role: Role, name: str) -> User:
    return user_service.create_user(
        db,
        email=f"{role.value}-{uuid.uuid4().hex[:8]}@example.org",
        password=TEST_PASSWORD,
        name=name,
        role=role,
    )


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return _create_user(db, Role.ADMIN, "Ana Admin")


@pytest.fixture(scope="function")
def editor_user(db: Session) -> User:
    return _create_user(db, Role.EDITOR, "Eduardo Editor")


@pytest.fixture(scope="function")
def viewer_user(db: Session) -> User:
    return _create_user(db, Role.VIEWER, "Valeria Viewer")


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = COOKIE_NAME


def token_for(user: User) -> str:
    return create_session_token(user.id, user.role.name, user.token_version)


@pytest.fixture(scope="function")
def admin_auth(admin_user: User) -> TestAuth:
    return TestAuth(user=admin_user, token=token_for(admin_user))


@pytest.fixture(scope="function")
def editor_token(editor_user: User) -> str:
    return token_for(editor_user)


@pytest.fixture(scope="function")
def viewer_token(viewer_user: User) -> str:
    return token_for(viewer_user)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


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
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    admin_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create admin AsyncClient with the session cookie and CSRF header.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={admin_auth.cookie_name: admin_auth.token},
        headers=CSRF_HEADERS,
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def bearer_client(
    db: Session,
    admin_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create admin AsyncClient authenticated with an Authorization header (no CSRF needed).
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=bearer(admin_auth.token),
    ) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# Form Factory
# =============================================================================

@pytest.fixture(scope="function")
def make_form(db: Session, admin_user: User):
    """
    Build a template with one section directly in the database.

    questions: [{"type": "NUMBER", "title": "...", "required": bool,
                 "options": [...], "config": {...}, "id": uuid}]
    """
    def _make(
        section_location: str = "comunidades",
        questions: list[dict] | None = None,
        form_id: uuid.UUID | None = None,
        name: str = "Formulario de prueba",
        is_public: bool = False,
    ) -> FormTemplate:
        types = {t.code: t for t in db.query(QuestionType).all()}
        form = FormTemplate(
            id=form_id or uuid.uuid4(),
            name=name,
            slug=f"formulario-{uuid.uuid4().hex[:6]}",
            section_location=section_location,
            is_public=is_public,
            created_by=admin_user.id,
        )
        section = FormSection(form_template=form, title="General", order_index=0)
        for idx, item in enumerate(questions or []):
            question = Question(
                id=item.get("id") or uuid.uuid4(),
                form_template=form,
                section=section,
                question_type=types[item["type"]],
                title=item["title"],
                is_required=item.get("required", False),
                order_index=idx,
                config=item.get("config"),
            )
            question.options = [
                QuestionOption(label=opt, value=opt, order_index=i)
                for i, opt in enumerate(item.get("options", []))
            ]
        db.add(form)
        db.commit()
        db.refresh(form)
        return form

    return _make

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from collabdocs.client.api import ApiClient
from collabdocs.core.config import settings
from collabdocs.core.db import create_engine, get_db, init_models
from collabdocs.core.security import create_session_token
from collabdocs.db.repositories.user_repository import UserRepository
from collabdocs.domains.identity.entities import User
from collabdocs.main import app

BASE_URL = "http://test"


@pytest.fixture
async def engine():
    """In-memory SQLite shared by every session of a test"""
    engine = create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def override_db(session_factory):
    """Route the app's get_db dependency to the test database"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


async def make_user(session_factory, email="alice@example.com", name="Alice"):
    async with session_factory() as session:
        return await UserRepository(session).create(User(id=None, name=name, email=email))


@pytest.fixture
async def user(session_factory):
    return await make_user(session_factory)


@pytest.fixture
async def other_user(session_factory):
    return await make_user(session_factory, email="bob@example.com", name="Bob")


@pytest.fixture
def auth_token(user):
    return create_session_token({"sub": user.id, "email": user.email})


@pytest.fixture
async def client(auth_token):
    """Client with a signed-in session cookie"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        cookies={settings.session_cookie_name: auth_token},
    ) as client:
        yield client


@pytest.fixture
async def anon_client():
    """Client without a session"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def api(client):
    return ApiClient(client=client)


@pytest.fixture
async def document(client):
    response = await client.post("/api/documents", json={
        "title": "Plan",
        "content": {"type": "doc", "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "Hello brave new world of docs"}]},
        ]},
    })
    return response.json()["data"]


@pytest.fixture
async def comment(client, document, user):
    response = await client.post(f"/api/documents/{document['id']}/comments", json={
        "userId": user.id,
        "content": "Looks good",
        "highlightedText": "brave",
        "selectionFrom": 6,
    })
    return response.json()["data"]

"""Общие фикстуры: БД SQLite в памяти и HTTP клиент поверх приложения."""

import os

# Настройки должны быть заданы до импорта приложения
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import Base, get_db
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User, UserRole
from app.domains.identity.services import IdentityService
import app.db.models  # noqa: F401
from app.main import app

PASSWORD = "Secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """Клиент FastAPI с подменённой зависимостью get_db"""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    """Фабрика пользователей с заданной ролью"""
    async def _make(role: UserRole = UserRole.USER, username: str = None) -> User:
        username = username or f"user{uuid.uuid4().hex[:8]}"
        user = User.create_user(
            email=f"{username}@example.com",
            username=username,
            password=PASSWORD,
            role=role,
        )
        return await UserRepository(test_db).create(user)

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {IdentityService.issue_token(user)}"}

    return _headers

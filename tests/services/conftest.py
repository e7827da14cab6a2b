"""Service test fixtures — async DB, seeded accounts and a FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the ledger's ON CONFLICT
      upsert is exercised through the sqlite dialect
    - Tokens minted with the app's own TokenService so route tests skip login
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from httpx import ASGITransport, AsyncClient

import store_ratings.infrastructure.database as db_module
from store_ratings.api.dependencies import get_token_service
from store_ratings.core.domain_types import Identity, Role, UserId
from store_ratings.db.base import Base
from store_ratings.infrastructure.database import (
    DatabaseSessionManager, create_engine_for_url, get_db,
)
from store_ratings.infrastructure.password_hasher import PasswordHasher
from store_ratings.main import app
from store_ratings.models.store import Store
from store_ratings.services.credential_store import CredentialStore

PASSWORD = "Abcdefg1!"


@pytest.fixture
async def test_engine():
    engine = create_engine_for_url("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def credential_store(test_db, hasher):
    return CredentialStore(test_db, hasher)


@pytest.fixture
def make_user(credential_store):
    """Factory: create an account and return its id."""
    counter = {"n": 0}

    async def _make(role: Role = Role.USER, email: str | None = None) -> UserId:
        counter["n"] += 1
        return await credential_store.create(
            name=f"Test {role.value.title()} Account Number {counter['n']:03d}",
            email=email or f"{role.value}{counter['n']}@example.com",
            password=PASSWORD,
            address="1 Test Street",
            role=role,
        )

    return _make


@pytest.fixture
def make_store(test_db):
    """Factory: insert a store directly and return its id."""
    counter = {"n": 0}

    async def _make(owner_id: int | None = None) -> int:
        counter["n"] += 1
        store = Store(
            name=f"Neighbourhood Test Store Number {counter['n']:03d}",
            email=f"store{counter['n']}@example.com",
            address=f"{counter['n']} Market Road",
            owner_id=owner_id,
        )
        test_db.add(store)
        await test_db.commit()
        return store.id

    return _make


@pytest.fixture
def auth_header():
    """Bearer header for an identity, signed with the app's token service."""

    def _header(user_id: int, role: Role, email: str = "someone@example.com") -> dict:
        token = get_token_service().issue(
            Identity(id=UserId(user_id), role=role, email=email),
        )
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager

"""Pytest configuration and fixtures for officeauth.

Environment is set before officeauth is imported so Settings validate with
the memory backend. HTTP tests get a fresh app (and so fresh in-memory
stores) per test; DB-dependent fixtures skip unless Postgres is configured.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TOKEN_PURGE_INTERVAL_SECONDS"] = "0"

from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from officeauth.application.dtos.account import AccountRecord
from officeauth.application.services import (
    AccountService,
    BrandingResolver,
    OfficeRegistry,
    PermissionEngine,
    TokenLifecycleManager,
)
from officeauth.core.config import get_settings
from officeauth.domain.enums import Role
from officeauth.infrastructure.memory import MemoryBackend
from officeauth.infrastructure.security.jwt import create_access_token
from officeauth.infrastructure.security.password import BcryptPasswordHasher
from officeauth.shared.utils.generators import generate_cuid

get_settings.cache_clear()

# Lowest bcrypt cost; keeps hashing in tests fast.
TEST_BCRYPT_ROUNDS = 4
TEST_PASSWORD = "correct-horse-battery"


class FakeClock:
    """Controllable UTC clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory() -> MemoryBackend:
    """Fresh set of in-memory stores."""
    return MemoryBackend()


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def engine(memory: MemoryBackend, clock: FakeClock) -> PermissionEngine:
    return PermissionEngine(memory.overrides, memory.audit, clock=clock)


@pytest.fixture
def token_manager(memory: MemoryBackend, clock: FakeClock) -> TokenLifecycleManager:
    return TokenLifecycleManager(
        memory.tokens,
        memory.credentials,
        verification_ttl=timedelta(hours=24),
        password_reset_ttl=timedelta(hours=1),
        clock=clock,
    )


@pytest.fixture
def accounts(
    memory: MemoryBackend,
    token_manager: TokenLifecycleManager,
    hasher: BcryptPasswordHasher,
    clock: FakeClock,
) -> AccountService:
    return AccountService(
        memory.credentials,
        token_manager,
        memory.audit,
        hasher,
        resend_limit=3,
        clock=clock,
    )


@pytest.fixture
def registry(memory: MemoryBackend, clock: FakeClock) -> OfficeRegistry:
    return OfficeRegistry(memory.offices, default_tax_year=2024, clock=clock)


@pytest.fixture
def branding(memory: MemoryBackend, clock: FakeClock) -> BrandingResolver:
    return BrandingResolver(memory.branding, memory.offices, clock=clock)


@pytest.fixture
def app():
    """A fresh FastAPI app on the memory backend."""
    from officeauth.main import create_app

    return create_app()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(app, hasher: BcryptPasswordHasher):
    """Create an account directly in the app's store; return (record, auth headers)."""

    async def _make(
        role: Role = Role.CLIENT,
        office_id: str | None = None,
        email: str | None = None,
    ) -> tuple[AccountRecord, dict[str, str]]:
        user_id = generate_cuid()
        record = AccountRecord(
            id=user_id,
            email=email or f"{role.value}-{user_id}@example.com",
            role=role,
            password_hash=hasher.hash_password(TEST_PASSWORD),
            office_id=office_id,
            created_at=datetime.now(UTC),
            updated_at=datetime.now(UTC),
        )
        await app.state.memory.credentials.create(record)
        token = create_access_token(
            data={"sub": user_id, "role": role.value, "office_id": office_id}
        )
        return record, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
async def admin_headers(make_user) -> dict[str, str]:
    _, headers = await make_user(Role.ADMIN)
    return headers


@pytest.fixture
async def db_session():
    """Database session for repository/integration tests. Rolls back after test.

    Requires STORAGE_BACKEND=postgres and DATABASE_URL with the schema migrated
    (alembic upgrade head). Skips otherwise; run without DB via
    pytest -m 'not requires_db'.
    """
    from officeauth.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set STORAGE_BACKEND=postgres and DATABASE_URL, "
            "then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()

"""
Test infrastructure for the socialnet service layer.

Strategy
--------
- SQLite in-memory via aiosqlite eliminates the need for a running Postgres
  instance in CI, keeping the suite fast and self-contained.
- StaticPool forces all async tasks to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- All tables are created fresh before each test and dropped after, giving
  each test a clean isolated state without needing transactions or truncation.
- Services are wired through ``ServiceRegistry`` exactly as production code
  does, over the test session.
"""
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from socialnet.database import drop_models, init_models
from socialnet.services import ServiceRegistry

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    await init_models(engine_test)
    yield
    await drop_models(engine_test)


@pytest.fixture
def session_factory() -> async_sessionmaker[AsyncSession]:
    """The test session factory, for tests that open their own sessions."""
    return async_session_test


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that need to interact with the
    database directly (e.g. seeding data, asserting ORM state).
    """
    async with async_session_test() as session:
        yield session


@pytest.fixture
def services(db_session: AsyncSession) -> ServiceRegistry:
    """All entity services wired over the shared test session."""
    return ServiceRegistry(db_session)


@pytest_asyncio.fixture
async def user(services: ServiceRegistry):
    return await services.users.create(
        {"email": "author@example.com", "password": "secret", "name": "Author"}
    )


@pytest_asyncio.fixture
async def post(services: ServiceRegistry, user):
    return await services.posts.create({"user_id": user.id, "description": "First post"})


@pytest.fixture
def test_engine():
    return engine_test

import os
import sys
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

# Must be set before the application modules read their settings.
_DB_FILE = Path(tempfile.gettempdir()) / f"finance_dashboard_test_{os.getpid()}.db"
os.environ.setdefault("JWT_SECRET", "test-secret-key-do-not-use-in-production")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_DB_FILE}")

from finance_dashboard.core.security import TokenService, get_token_service, hash_password  # noqa: E402
from finance_dashboard.db.session import get_db  # noqa: E402
from finance_dashboard.main import app  # noqa: E402
from finance_dashboard.models.user import User  # noqa: E402
from finance_dashboard.repositories.category import CategoryRepository  # noqa: E402
from finance_dashboard.repositories.category_rule import CategoryRuleRepository  # noqa: E402
from finance_dashboard.repositories.transaction import TransactionRepository  # noqa: E402
from finance_dashboard.repositories.user import UserRepository  # noqa: E402
from finance_dashboard.services.auth import AuthService  # noqa: E402
from finance_dashboard.services.transaction import TransactionService  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", os.environ["DATABASE_URL"])

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables and default categories, and drop everything after.

    Not autouse: pure unit tests (tokens, rule matching) run without a database.
    """
    from finance_dashboard.models.base import Base
    from finance_dashboard.repositories.category import seed_default_categories

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        await seed_default_categories(session)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    # Dispose of pooled connections so the next test's event loop starts clean.
    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_factory() -> async_sessionmaker:
    """Session factory for tests that need several independent sessions."""
    return TestSessionLocal


@pytest.fixture
def token_service() -> TokenService:
    """Token service with the production TTLs and the test secret."""
    return TokenService(
        secret_key=os.environ["JWT_SECRET"],
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(hours=24),
    )


@pytest.fixture
async def auth_service(db_session: AsyncSession, token_service: TokenService) -> AuthService:
    return AuthService(UserRepository(db_session), token_service)


@pytest.fixture
async def transaction_service(db_session: AsyncSession) -> TransactionService:
    return TransactionService(
        TransactionRepository(db_session),
        CategoryRepository(db_session),
        CategoryRuleRepository(db_session),
    )


@pytest.fixture
async def categories(db_session: AsyncSession) -> dict[str, int]:
    """Seeded default categories as name -> id."""
    return {c.name: c.id for c in await CategoryRepository(db_session).get_all()}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a password user for authentication tests."""
    repo = UserRepository(db_session)
    user = User(
        email="testuser@example.com",
        password_hash=hash_password("password123"),
        global_currency="RUB",
    )
    return await repo.create(user)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user for ownership tests."""
    repo = UserRepository(db_session)
    user = User(
        email="other@example.com",
        password_hash=hash_password("password456"),
        global_currency="USD",
    )
    return await repo.create(user)


@pytest.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Provide authentication headers with valid access token."""
    token = get_token_service().issue_access_token(str(test_user.id), test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def other_auth_headers(other_user: User) -> dict[str, str]:
    token = get_token_service().issue_access_token(str(other_user.id), other_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

"""Shared test configuration and fixtures.

Uses an in-memory SQLite database per test for full isolation:
- Each test gets a fresh schema built from the ORM metadata.
- The session is wrapped in a transaction that always rolls back.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from shareit.config import settings
from shareit.database import Base, enable_sqlite_foreign_keys, get_db
from shareit.main import app
from shareit.models import Booking, BookingStatus, Item, User

# ---------------------------------------------------------------------------
# Per-test: fresh in-memory database and transactional rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an engine over a private in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: users and items
# ---------------------------------------------------------------------------


async def make_user(db: AsyncSession, name: str, email: str) -> User:
    user = User(name=name, email=email)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def booking_factory(db_session: AsyncSession):
    """Insert booking rows directly, bypassing the time-range checks."""

    async def _make(
        item: Item,
        booker: User,
        start: datetime,
        end: datetime,
        status: BookingStatus = BookingStatus.APPROVED,
    ) -> Booking:
        booking = Booking(start=start, end=end, item=item, booker=booker, status=status)
        db_session.add(booking)
        await db_session.flush()
        await db_session.refresh(booking)
        return booking

    return _make


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Owner", "owner@example.com")


@pytest_asyncio.fixture
async def booker(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Booker", "booker@example.com")


@pytest_asyncio.fixture
async def stranger(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Stranger", "stranger@example.com")


@pytest_asyncio.fixture
async def item(db_session: AsyncSession, owner: User) -> Item:
    """An available drill owned by ``owner``."""
    drill = Item(name="Drill", description="Cordless drill", available=True, owner=owner)
    db_session.add(drill)
    await db_session.flush()
    await db_session.refresh(drill)
    return drill


@pytest_asyncio.fixture
async def owner_headers(owner: User) -> dict[str, str]:
    return {settings.user_id_header: str(owner.id)}


@pytest_asyncio.fixture
async def booker_headers(booker: User) -> dict[str, str]:
    return {settings.user_id_header: str(booker.id)}


@pytest_asyncio.fixture
async def stranger_headers(stranger: User) -> dict[str, str]:
    return {settings.user_id_header: str(stranger.id)}


@pytest.fixture
def future_window():
    """Return a builder of (start, end) ISO strings safely in the future."""

    def _window(days_ahead: int = 1, hours: int = 2) -> tuple[str, str]:
        start = (datetime.now() + timedelta(days=days_ahead)).replace(microsecond=0)
        end = start + timedelta(hours=hours)
        return start.isoformat(), end.isoformat()

    return _window


@pytest_asyncio.fixture
async def user_factory(db_session: AsyncSession):
    """Create extra users on demand."""

    async def _make(name: str, email: str) -> User:
        return await make_user(db_session, name, email)

    return _make

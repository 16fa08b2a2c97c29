"""
Global pytest configuration and fixtures.

Each test gets its own SQLite file database (aiosqlite) with all tables created,
so sessions opened from the same factory are isolated like real connections.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Import all models so their tables are registered on Base.metadata
import repokit.domain  # noqa: F401
from repokit.db.base import Base
from repokit.domain.book import Book
from repokit.repositories.book import BookRepository


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'repokit_test.db'}"


@pytest_asyncio.fixture
async def engine(database_url):
    engine = create_async_engine(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(session) -> BookRepository:
    return BookRepository(session)


@pytest_asyncio.fixture
async def seeded_books(session_factory) -> list[Book]:
    """Five committed books, written through a separate session."""
    books = [
        Book(name=f"Book {i}", author="Herbert" if i % 2 else "Le Guin", published_year=1960 + i)
        for i in range(1, 6)
    ]
    async with session_factory() as s:
        s.add_all(books)
        await s.commit()
    return books

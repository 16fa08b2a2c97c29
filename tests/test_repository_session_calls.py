"""Unit tests for BaseRepository write paths and cancellation, with a mocked session."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from repokit.domain.book import Book
from repokit.repositories.book import BookRepository


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    session = AsyncMock(spec=AsyncSession)
    session.add = Mock()
    session.expunge = Mock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.__iter__ = Mock(return_value=iter([]))
    return session


@pytest.fixture
def repository(mock_session):
    return BookRepository(mock_session)


@pytest.mark.unit
class TestAdd:

    @pytest.mark.asyncio
    async def test_add_and_save(self, repository, mock_session):
        book = Book(name="Dune")

        result = await repository.add(book)

        assert result is book
        mock_session.add.assert_called_once_with(book)
        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(book)

    @pytest.mark.asyncio
    async def test_add_without_saving(self, repository, mock_session):
        book = Book(name="Dune")

        result = await repository.add(book, save_changes=False)

        assert result is book
        mock_session.add.assert_called_once_with(book)
        mock_session.commit.assert_not_awaited()
        mock_session.refresh.assert_not_awaited()


@pytest.mark.unit
class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_goes_through_delete_range(self, repository, monkeypatch):
        delete_range = AsyncMock()
        monkeypatch.setattr(repository, "delete_range", delete_range)
        book = Book(name="Dune")

        await repository.delete(book, save_changes=False)

        delete_range.assert_awaited_once_with([book], save_changes=False)

    @pytest.mark.asyncio
    async def test_delete_range_marks_every_entity_then_commits_once(self, repository, mock_session):
        books = [Book(name="Dune"), Book(name="Emma")]

        await repository.delete_range(iter(books))

        assert [c.args[0] for c in mock_session.delete.await_args_list] == books
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_range_without_saving(self, repository, mock_session):
        await repository.delete_range([Book(name="Dune")], save_changes=False)

        mock_session.delete.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


@pytest.mark.unit
class TestSaveChanges:

    @pytest.mark.asyncio
    async def test_save_changes_commits(self, repository, mock_session):
        await repository.save_changes()

        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_errors_propagate_unchanged(self, repository, mock_session):
        error = RuntimeError("database is locked")
        mock_session.commit.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            await repository.add(Book(name="Dune"))

        assert exc_info.value is error
        mock_session.refresh.assert_not_awaited()


@pytest.mark.unit
class TestCancellation:

    @pytest.mark.asyncio
    async def test_cancelling_an_in_flight_read(self, repository, mock_session):
        started = asyncio.Event()

        async def never_returns(*args, **kwargs):
            started.set()
            await asyncio.Event().wait()

        mock_session.execute.side_effect = never_returns

        task = asyncio.create_task(repository.get())
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        mock_session.execute.assert_awaited_once()
        mock_session.expunge.assert_not_called()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelling_an_add_while_committing(self, repository, mock_session):
        started = asyncio.Event()

        async def never_returns(*args, **kwargs):
            started.set()
            await asyncio.Event().wait()

        mock_session.commit.side_effect = never_returns
        book = Book(name="Dune")

        task = asyncio.create_task(repository.add(book))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        mock_session.add.assert_called_once_with(book)
        mock_session.refresh.assert_not_awaited()

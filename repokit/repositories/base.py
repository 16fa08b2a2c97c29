"""Generic async repository: composed reads and unit-of-work writes over one AsyncSession."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select, inspect
from sqlalchemy.engine import ScalarResult
from sqlalchemy.ext.asyncio import AsyncSession

from repokit.db.base import Base
from repokit.repositories.query import (
    OrderFn,
    PagedResult,
    SelectorFn,
    SortDirection,
    WhereFn,
    compose_query,
    count_query,
    is_no_tracking,
)

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository bound to a single AsyncSession.

    Every read accepts the same optional parameters (``where``, ``selector``,
    ``order_by``, ``direction``, ``skip``, ``take``, ``no_tracking``); see
    :func:`repokit.repositories.query.compose_query`.

    Reads default to no-tracking: entities loaded by the read are expunged from
    the session, so edits to them are not flushed. Instances the session was
    already tracking before the read are returned as they are.

    Nothing is caught or retried here. SQLAlchemy and driver errors, and
    ``asyncio.CancelledError``, reach the caller unchanged. The session is not
    safe for concurrent use, so calls on one repository must be awaited one
    at a time.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _query(self, **params: Any) -> Select:
        return compose_query(self.model, **params)

    async def _fetch(self, stmt: Select, consume: Callable[[ScalarResult], Any]) -> Any:
        """Execute ``stmt`` and apply ``consume`` to its scalars, honouring no-tracking."""
        tracked_before = list(self._session)
        result = await self._session.execute(stmt)
        loaded = consume(result.scalars())

        if is_no_tracking(stmt):
            instances = loaded if isinstance(loaded, list) else [loaded]
            self._detach(instances, tracked_before)
        return loaded

    def _detach(self, instances: list[ModelT], tracked_before: list[Any]) -> None:
        keep = {id(obj) for obj in tracked_before}
        for instance in instances:
            if id(instance) not in keep and instance in self._session:
                self._session.expunge(instance)

    async def _scalar(self, stmt: Select) -> int:
        return (await self._session.execute(stmt)).scalar_one()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get(
        self,
        *,
        where: Optional[WhereFn] = None,
        selector: Optional[SelectorFn] = None,
        order_by: Optional[OrderFn] = None,
        direction: SortDirection | str = SortDirection.ASC,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        no_tracking: bool = True,
    ) -> list[ModelT]:
        """Return every entity matched by the composed query."""
        stmt = self._query(
            where=where, selector=selector, order_by=order_by, direction=direction,
            skip=skip, take=take, no_tracking=no_tracking,
        )
        return await self._fetch(stmt, lambda scalars: list(scalars.all()))

    async def get_paged(
        self,
        *,
        where: Optional[WhereFn] = None,
        selector: Optional[SelectorFn] = None,
        order_by: Optional[OrderFn] = None,
        direction: SortDirection | str = SortDirection.ASC,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        no_tracking: bool = True,
    ) -> PagedResult[ModelT]:
        """Return one window of data plus the count of the whole filtered set.

        The count ignores ``skip`` / ``take``. The two reads are not run in
        parallel: an AsyncSession allows one operation at a time, so the data
        read and the count are awaited one after the other on the bound
        session. If either raises, so does this call.
        """
        data_stmt = self._query(
            where=where, selector=selector, order_by=order_by, direction=direction,
            skip=skip, take=take, no_tracking=no_tracking,
        )
        unwindowed = self._query(
            where=where, selector=selector, order_by=order_by, direction=direction,
            no_tracking=no_tracking,
        )

        data = await self._fetch(data_stmt, lambda scalars: list(scalars.all()))
        total = await self._scalar(count_query(unwindowed, keep_order=False))
        return PagedResult(data=data, count=total)

    async def get_single(
        self,
        *,
        where: Optional[WhereFn] = None,
        selector: Optional[SelectorFn] = None,
        order_by: Optional[OrderFn] = None,
        direction: SortDirection | str = SortDirection.ASC,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        no_tracking: bool = True,
    ) -> ModelT:
        """Return the only matching entity.

        Raises ``sqlalchemy.exc.NoResultFound`` when nothing matches and
        ``sqlalchemy.exc.MultipleResultsFound`` when more than one row does.
        """
        stmt = self._query(
            where=where, selector=selector, order_by=order_by, direction=direction,
            skip=skip, take=take, no_tracking=no_tracking,
        )
        return await self._fetch(stmt, lambda scalars: scalars.one())

    async def count(
        self,
        *,
        where: Optional[WhereFn] = None,
        selector: Optional[SelectorFn] = None,
        order_by: Optional[OrderFn] = None,
        direction: SortDirection | str = SortDirection.ASC,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        no_tracking: bool = True,
    ) -> int:
        """Count the composed query, window included (unlike ``get_paged``)."""
        stmt = self._query(
            where=where, selector=selector, order_by=order_by, direction=direction,
            skip=skip, take=take, no_tracking=no_tracking,
        )
        windowed = skip is not None or take is not None
        return await self._scalar(count_query(stmt, keep_order=windowed))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def add(self, entity: ModelT, *, save_changes: bool = True) -> ModelT:
        """Register ``entity`` for insertion.

        With ``save_changes`` the session is committed and the entity refreshed,
        so store-generated values are populated. Otherwise the pending entity
        is returned as is.
        """
        self._session.add(entity)
        if save_changes:
            await self.save_changes()
            await self._session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT, *, save_changes: bool = True) -> None:
        await self.delete_range([entity], save_changes=save_changes)

    async def delete_range(
        self, entities: Iterable[ModelT], *, save_changes: bool = True
    ) -> None:
        """Register every entity for removal.

        Detached entities (e.g. from a no-tracking read) are merged back into
        the session first. Entities added but never flushed are just dropped
        from the session.
        """
        entities = list(entities)
        for entity in entities:
            state = inspect(entity)
            if state.pending:
                self._session.expunge(entity)
                continue
            if state.detached:
                entity = await self._session.merge(entity)
            await self._session.delete(entity)

        logger.debug("Marked %d %s row(s) for deletion", len(entities), self.model.__name__)
        if save_changes:
            await self.save_changes()

    async def save_changes(self) -> None:
        """Commit every pending change of the bound session."""
        await self._session.commit()
        logger.debug("Committed pending changes for %s", self.model.__name__)

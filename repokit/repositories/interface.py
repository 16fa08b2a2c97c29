"""Repository contract: the generic operation set of a repository.

BaseRepository satisfies it structurally. Callers that only need the generic
operations can type against this and accept any implementation with the same
capabilities (e.g. a test double).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Protocol, TypeVar, runtime_checkable

from repokit.repositories.query import OrderFn, PagedResult, SelectorFn, SortDirection, WhereFn

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """Protocol for generic repositories."""

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
    ) -> list[T]: ...

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
    ) -> PagedResult[T]: ...

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
    ) -> T: ...

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
    ) -> int: ...

    async def add(self, entity: T, *, save_changes: bool = True) -> T: ...

    async def delete(self, entity: T, *, save_changes: bool = True) -> None: ...

    async def delete_range(self, entities: Iterable[T], *, save_changes: bool = True) -> None: ...

    async def save_changes(self) -> None: ...

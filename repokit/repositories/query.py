"""Query composition for the generic repository.

Reads are described by plain callables that receive the mapped class and
return SQLAlchemy expressions, e.g.::

    where=lambda Book: Book.name.ilike("%dune%")
    order_by=lambda Book: Book.published_year
    selector=lambda Book: (Book.name, Book.author)

The composer never inspects those expressions; it only places them on a
``Select`` in a fixed order:

    no-tracking flag -> where -> order by -> projection -> offset -> limit

so ordering may reference columns the projection leaves out, and the window is
taken over the filtered, ordered, projected rows.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.orm import load_only

T = TypeVar("T")

# Execution option read back by the repository after a statement has run.
NO_TRACKING_OPTION = "repokit_no_tracking"

WhereFn = Callable[[Any], Any]
SelectorFn = Callable[[Any], Any]
OrderFn = Callable[[Any], Any]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class PagedResult(Generic[T]):
    """One page of data plus the size of the whole (unwindowed) result set."""

    data: list[T] = field(default_factory=list)
    count: int = 0


def _as_tuple(value: Any) -> tuple:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _check_window(name: str, value: Optional[int]) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def compose_query(
    model: type,
    *,
    where: Optional[WhereFn] = None,
    selector: Optional[SelectorFn] = None,
    order_by: Optional[OrderFn] = None,
    direction: SortDirection | str = SortDirection.ASC,
    skip: Optional[int] = None,
    take: Optional[int] = None,
    no_tracking: bool = True,
) -> Select:
    """Build a SELECT over ``model`` from the optional read parameters."""
    _check_window("skip", skip)
    _check_window("take", take)
    direction = SortDirection(direction)

    stmt = select(model)

    if no_tracking:
        stmt = stmt.execution_options(**{NO_TRACKING_OPTION: True})

    if where is not None:
        stmt = stmt.where(where(model))

    if order_by is not None:
        apply = desc if direction is SortDirection.DESC else asc
        stmt = stmt.order_by(*(apply(key) for key in _as_tuple(order_by(model))))

    if selector is not None:
        # Columns outside the projection raise on access instead of lazy loading
        stmt = stmt.options(load_only(*_as_tuple(selector(model)), raiseload=True))

    if skip is not None:
        stmt = stmt.offset(skip)

    if take is not None:
        stmt = stmt.limit(take)

    return stmt


def count_query(stmt: Select, *, keep_order: bool = True) -> Select:
    """Wrap a composed statement as ``SELECT count(*) FROM (<stmt>)``.

    Pass ``keep_order=False`` when ``stmt`` has no window: ordering cannot
    change the count, and some dialects reject ORDER BY in a derived table.
    """
    inner = stmt if keep_order else stmt.order_by(None)
    return select(func.count()).select_from(inner.subquery())


def is_no_tracking(stmt: Select) -> bool:
    return bool(stmt.get_execution_options().get(NO_TRACKING_OPTION, False))


__all__ = [
    "NO_TRACKING_OPTION",
    "PagedResult",
    "SortDirection",
    "compose_query",
    "count_query",
    "is_no_tracking",
]

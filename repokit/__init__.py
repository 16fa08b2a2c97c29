"""repokit — generic async repository over SQLAlchemy, with a demo Books API."""
from repokit.repositories import (
    BaseRepository,
    PagedResult,
    Repository,
    SortDirection,
    compose_query,
    count_query,
)

__all__ = [
    "BaseRepository",
    "PagedResult",
    "Repository",
    "SortDirection",
    "compose_query",
    "count_query",
]

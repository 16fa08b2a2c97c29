"""Repositories package — generic repository, query composer and concrete repositories."""
from repokit.repositories.base import BaseRepository
from repokit.repositories.book import BookRepository
from repokit.repositories.interface import Repository
from repokit.repositories.query import PagedResult, SortDirection, compose_query, count_query

__all__ = [
    "BaseRepository",
    "BookRepository",
    "PagedResult",
    "Repository",
    "SortDirection",
    "compose_query",
    "count_query",
]

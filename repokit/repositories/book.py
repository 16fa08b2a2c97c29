"""Book repository — REFERENCE pattern for all repositories.

How to add a new repository:
  1. Create repokit/repositories/my_entity.py
  2. class MyEntityRepository(BaseRepository[MyEntity]):
         model = MyEntity
  3. Add any domain-specific query methods as needed
"""


from sqlalchemy import func

from repokit.domain.book import Book
from repokit.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    model = Book

    async def find_by_name(self, name: str) -> list[Book]:
        """Case-insensitive exact match on the book name."""
        return await self.get(
            where=lambda m: func.lower(m.name) == name.lower(),
            order_by=lambda m: m.created_at,
        )

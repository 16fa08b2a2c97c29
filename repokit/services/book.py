"""Book service — REFERENCE pattern for all services.

How to add a new service:
  1. Create repokit/services/my_entity.py
  2. Inject AsyncSession via constructor
  3. Instantiate the repository
  4. Delegate all DB work to the repository
  5. Raise AppException subclasses for business rule violations

Rule: No FastAPI here. Pure Python business logic on top of the repository.
"""


import logging

from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from repokit.core.exceptions import ConflictError, NotFoundError, ValidationError
from repokit.core.pagination import PaginationParams
from repokit.domain.book import Book
from repokit.repositories.book import BookRepository
from repokit.repositories.query import PagedResult
from repokit.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = frozenset({"name", "author", "published_year", "created_at", "updated_at"})

class BookService:
    def __init__(self, session: AsyncSession):
        self._repo = BookRepository(session)

    async def list_books(
        self, pagination: PaginationParams, name: str | None = None
    ) -> PagedResult[Book]:
        if pagination.sort not in SORTABLE_FIELDS:
            raise ValidationError(f"Cannot sort by '{pagination.sort}'")

        where = (lambda m: m.name.icontains(name, autoescape=True)) if name else None
        return await self._repo.get_paged(
            where=where,
            order_by=lambda m: getattr(m, pagination.sort),
            direction=pagination.direction,
            skip=pagination.skip,
            take=pagination.take,
        )

    async def get_book(self, book_id: str, *, tracked: bool = False) -> Book:
        try:
            return await self._repo.get_single(
                where=lambda m: m.id == book_id, no_tracking=not tracked
            )
        except NoResultFound:
            raise NotFoundError("Book", book_id) from None

    async def create_book(self, data: BookCreate) -> Book:
        if await self._repo.find_by_name(data.name):
            raise ConflictError(f"Book '{data.name}' already exists")
        book = await self._repo.add(Book(**data.model_dump()))
        logger.info("Created book %s (%s)", book.id, book.name)
        return book

    async def update_book(self, book_id: str, data: BookUpdate) -> Book:
        book = await self.get_book(book_id, tracked=True)
        for field, value in data.model_dump(exclude_none=True, exclude_unset=True).items():
            setattr(book, field, value)
        await self._repo.save_changes()
        return book

    async def delete_book(self, book_id: str) -> None:
        book = await self.get_book(book_id)
        await self._repo.delete(book)
        logger.info("Deleted book %s", book_id)

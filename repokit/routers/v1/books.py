"""Book CRUD router — REFERENCE pattern for all v1 routers.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session via Depends
  3. Instantiate the service with the session
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from repokit.core.pagination import PaginationParams
from repokit.core.response import DataResponse, ListResponse, paginated
from repokit.db.base import get_db
from repokit.schemas.book import BookCreate, BookOut, BookUpdate
from repokit.services.book import BookService

router = APIRouter(prefix="/books", tags=["Books"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[BookOut])
async def list_books(
    name: Optional[str] = Query(default=None, description="Case-insensitive name search"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List books (paginated). Filter by ?name=, sort by ?sort=&order=."""
    result = await BookService(session).list_books(pagination, name=name)
    result.data = [BookOut.model_validate(b) for b in result.data]
    return paginated(result, pagination.page, pagination.limit)


@router.post("", response_model=DataResponse[BookOut], status_code=status.HTTP_201_CREATED)
async def create_book(
    body: BookCreate,
    session: AsyncSession = Depends(get_db),
):
    """Create a new book."""
    book = await BookService(session).create_book(body)
    return {"data": BookOut.model_validate(book)}


@router.get("/{book_id}", response_model=DataResponse[BookOut])
async def get_book(
    book_id: str,
    session: AsyncSession = Depends(get_db),
):
    book = await BookService(session).get_book(book_id)
    return {"data": BookOut.model_validate(book)}


@router.put("/{book_id}", response_model=DataResponse[BookOut])
async def update_book(
    book_id: str,
    body: BookUpdate,
    session: AsyncSession = Depends(get_db),
):
    book = await BookService(session).update_book(book_id, body)
    return {"data": BookOut.model_validate(book)}


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: str,
    session: AsyncSession = Depends(get_db),
):
    await BookService(session).delete_book(book_id)

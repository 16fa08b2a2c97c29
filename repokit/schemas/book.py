"""Book Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from repokit.schemas.common import CamelModel

class BookCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    author: str | None = None
    published_year: int | None = None

class BookUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    author: str | None = None
    published_year: int | None = None

class BookOut(CamelModel):
    id: str
    name: str
    author: str | None = None
    published_year: int | None = None
    created_at: datetime
    updated_at: datetime

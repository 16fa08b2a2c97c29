"""SQLAlchemy ORM model for Books.

This is the REFERENCE module showing the pattern for domain models:
  - Inherit Base, EntityMixin, TimestampMixin
  - UUID primary key (from EntityMixin)
  - created_at / updated_at (from TimestampMixin)
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from repokit.db.base import Base
from repokit.domain.mixins import EntityMixin, TimestampMixin


class Book(Base, EntityMixin, TimestampMixin):
    __tablename__ = "books"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    published_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, name={self.name!r})"

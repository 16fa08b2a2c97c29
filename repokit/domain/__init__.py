"""Domain package — all ORM models are imported here so create_all detects them.

Folder intent:
  book.py    — REFERENCE pattern (copy when adding new entities)
  mixins.py  — Shared EntityMixin, TimestampMixin
"""

from repokit.domain.book import Book

__all__ = [
    "Book",
]

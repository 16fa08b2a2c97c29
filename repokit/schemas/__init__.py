"""Pydantic schemas package.

Folder intent:
  common.py   — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  book.py     — REFERENCE pattern (copy when adding new entities)
"""

"""Services package — all business logic lives here, never in routers.

Files:
  book.py  — REFERENCE service pattern (copy when adding new entities)

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""

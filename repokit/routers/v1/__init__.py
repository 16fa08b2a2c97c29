"""v1 API routers."""
from repokit.routers.v1.books import router as books_router

__all__ = ["books_router"]

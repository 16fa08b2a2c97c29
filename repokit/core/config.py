from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "repokit Books API"
    app_env: str = "development"

    # Database (any SQLAlchemy async URL; SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./repokit_dev.db",
        alias="DATABASE_URL",
    )

    # Paging defaults for list endpoints
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=200, alias="MAX_PAGE_SIZE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()

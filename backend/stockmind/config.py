"""Application configuration using Pydantic settings."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"
    log_level: Optional[str] = None  # Defaults to DEBUG in development, INFO elsewhere

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Redis (for ARQ worker)
    redis_url: str = "redis://127.0.0.1:6379"

    # Accounts
    password_min_length: int = 8

    # Projects
    project_recovery_days: int = 7  # Soft-deleted projects are purged after this

    # Pagination
    default_page_limit: int = 20
    max_page_limit: int = 100

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()

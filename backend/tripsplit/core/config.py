"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Tripsplit"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./tripsplit.db"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Ledger
    DEFAULT_CURRENCY: str = "USD"  # Display-only, no conversion is ever done
    PARTICIPANT_REMOVAL_POLICY: str = "cascade"  # "cascade" drops orphaned expenses, "reject" refuses the removal

    @field_validator("PARTICIPANT_REMOVAL_POLICY")
    @classmethod
    def check_removal_policy(cls, v):
        """Only the two documented removal policies are accepted."""
        v = v.strip().lower()
        if v not in ("cascade", "reject"):
            raise ValueError("PARTICIPANT_REMOVAL_POLICY must be 'cascade' or 'reject'")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

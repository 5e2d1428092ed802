# app/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str
    DATABASE_TEST_URL: Optional[str] = None

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and "localhost" in v:
            raise ValueError("🚨 Production environment cannot use localhost database!")
        return v

    # === API ===
    APP_NAME: str = "QR Provenance Verification Service"
    API_PREFIX: str = "/api"

    # === JWT / Admin gate ===
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"

    # === CORS ===
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    ALLOWED_METHODS: List[str] = ["*"]
    ALLOWED_HEADERS: List[str] = ["*"]

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # === Business Rules ===
    SCAN_LIMIT: int = 10
    QR_ID_MAX_LENGTH: int = 50
    IMPORT_MAX_ROWS: int = 1000
    IMPORT_MAX_FILE_ROWS: int = 10000
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Create a global settings instance
settings = Settings()

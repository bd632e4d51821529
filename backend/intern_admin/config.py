"""Centralised application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./intern_registration.db"
    # Development mode: 5xx envelopes carry the underlying error text.
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # File upload
    UPLOAD_DIR: str = "uploads"
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5 MB
    MAX_DOCUMENT_SIZE: int = 10 * 1024 * 1024  # 10 MB
    MAX_MULTIPLE_FILES: int = 5
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Region lookup (wilayah.id)
    WILAYAH_BASE_URL: str = "https://wilayah.id/api"
    WILAYAH_TIMEOUT_SECONDS: float = 10.0

    class Config:
        # Load backend/.env regardless of the working directory.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

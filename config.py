"""Configuration management for the analytics service."""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _default_database_url() -> str:
    """Build a PostgreSQL URL from the DB_* variables"""
    return (
        f"postgresql://{os.getenv('DB_USER', 'postgres')}:{os.getenv('DB_PASSWORD', '')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'workout_tracker')}"
    )


class Config:
    """Application configuration."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL") or _default_database_url()

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:8080,http://127.0.0.1:5500,null",
        ).split(",")
        if origin.strip()
    ]

    # Analytics
    ANALYTICS_LOOKBACK_DAYS: int = int(os.getenv("ANALYTICS_LOOKBACK_DAYS", "28"))  # days read from the DB
    SECONDARY_RECOVERY_MULTIPLIER: float = float(os.getenv("SECONDARY_RECOVERY_MULTIPLIER", "0.4"))

"""
Hallaien configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # Identity provider tokens (issued externally, verified here)
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = os.environ.get("JWT_ALGORITHM", "HS256")
    JWT_AUDIENCE: str = os.environ.get("JWT_AUDIENCE", "authenticated")

    # ElevenLabs conversational AI
    ELEVENLABS_API_KEY: str = os.environ.get("ELEVENLABS_API_KEY", "")
    ELEVENLABS_API_URL: str = os.environ.get("ELEVENLABS_API_URL", "https://api.eu.residency.elevenlabs.io")
    ELEVENLABS_TIMEOUT_SECONDS: float = float(os.environ.get("ELEVENLABS_TIMEOUT_SECONDS", "10"))

    # Share codes
    SHARE_CODE_TTL_HOURS: int = int(os.environ.get("SHARE_CODE_TTL_HOURS", "24"))
    SHARE_CODE_MAX_ATTEMPTS: int = int(os.environ.get("SHARE_CODE_MAX_ATTEMPTS", "10"))

    # Rate Limits
    REDEEM_RATE_LIMIT_PER_STUDENT: int = int(os.environ.get("REDEEM_RATE_LIMIT_PER_STUDENT", "20"))  # per 10 minutes
    REDEEM_RATE_WINDOW_MINUTES: int = 10

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")


# Singleton instance
settings = Settings()

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")

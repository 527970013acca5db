"""
Configuration module for the certification search backend.

Loads environment variables and validates required settings.
"""
import logging
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _getenv_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        logger.warning(f"Invalid integer for {name}={raw!r}, using {default}")
        return default


def _getenv_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        return float(raw) if raw.strip() else default
    except ValueError:
        logger.warning(f"Invalid number for {name}={raw!r}, using {default}")
        return default


def _getenv_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = _getenv_float("GEMINI_TEMPERATURE", 0.2)
    GEMINI_MAX_OUTPUT_TOKENS: int = _getenv_int("GEMINI_MAX_OUTPUT_TOKENS", 8192)

    # Result cache policy (0 disables the bound)
    CACHE_MAX_ENTRIES: int = _getenv_int("CACHE_MAX_ENTRIES", 0)
    CACHE_TTL_SECONDS: float = _getenv_float("CACHE_TTL_SECONDS", 0)

    # PDI searches always reach the model unless this is switched on
    PDI_CACHE_READS_ENABLED: bool = _getenv_bool("PDI_CACHE_READS_ENABLED", False)

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (only read in production)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @property
    def cache_max_entries(self) -> Optional[int]:
        """Capacity bound for the result cache, or None when unbounded."""
        return self.CACHE_MAX_ENTRIES if self.CACHE_MAX_ENTRIES > 0 else None

    @property
    def cache_ttl_seconds(self) -> Optional[float]:
        """Entry lifetime for the result cache, or None when entries never expire."""
        return self.CACHE_TTL_SECONDS if self.CACHE_TTL_SECONDS > 0 else None

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "GEMINI_API_KEY": cls.GEMINI_API_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# A missing key is not fatal: requests go out with an empty credential and
# the upstream rejection surfaces as a 500 on each search.
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        logger.warning(f"{e} Searches will fail until the key is configured.")

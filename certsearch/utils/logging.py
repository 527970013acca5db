"""
Logging utilities for the certification search backend.

Provides standardized logger configuration.

SECURITY RULES:
- NEVER log the Gemini API key or any request credential
- Log raw model output only as a bounded preview (first 500 characters)

Acceptable logging:
- High-level events (e.g., "Cache hit for query='azure'")
- Normalized query keys and result counts
- Upstream failures and sanitized error messages
"""

import logging
from typing import Optional

RAW_TEXT_PREVIEW_CHARS = 500


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from certsearch.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: Optional[str], limit: int = RAW_TEXT_PREVIEW_CHARS) -> str:
    """Return a bounded preview of raw model text for log lines."""
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit] + "..."

"""
Logging setup for the storefront.

Modules get their logger through get_logger(__name__). The root logger is
configured once from LOG_LEVEL / STOREFRONT_ENV on import; create_app
calls configure_logging() again with the loaded Settings.

    from storefront.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Per-request chatter from the catalog HTTP client
NOISY_LOGGERS = ("httpx", "httpcore")

_HANDLER_NAME = "storefront-console"

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _level_from_name(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None, production: Optional[bool] = None) -> None:
    """
    Attach the console handler to the root logger (idempotent).

    Args:
        level: Level name; defaults to LOG_LEVEL
        production: Use the compact format; defaults to STOREFRONT_ENV == "production"
    """
    root = logging.getLogger()
    if level is None:
        level = os.environ.get("LOG_LEVEL")
    if production is None:
        production = os.environ.get("STOREFRONT_ENV", "").lower() == "production"

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        if root.handlers:
            # Someone else (pytest, uvicorn) already owns the root logger
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)

    root.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if production else LOG_FORMAT))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _clean(value: object, limit: int) -> tuple[str, bool]:
    """Escape control characters (CWE-117) and cut to limit."""
    text = str(value).translate(_CONTROL_CHARS)
    return text[:limit], len(text) > limit


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """Short form of an identifier or token: first 8 characters, or "N/A"."""
    if id_value is None or id_value == "":
        return "N/A"
    text, _ = _clean(id_value, 8)
    return text


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """User-supplied text made safe to log; long values end with "..."."""
    if not value:
        return "N/A"
    text, truncated = _clean(value, max_length)
    return text + "..." if truncated else text


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]

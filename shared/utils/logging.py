"""
Centralized Logging Utilities

This module sets up the standard library logging used by every auditor
module and provides helpers that keep secrets out of log records.
"""

import hashlib
import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: Union[str, int] = "INFO", fmt: Optional[str] = None) -> None:
    """
    Configure the root logger once for the auditor.

    Args:
        level: Log level name or number (e.g. "DEBUG", logging.INFO)
        fmt: Optional format string; defaults to DEFAULT_FORMAT
    """
    global _configured
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level)

    # The SDK's HTTP stack is noisy at INFO.
    for noisy in ("httpx", "httpcore", "google_genai"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)


def key_fingerprint(api_key: Optional[str]) -> str:
    """Generate a stable, non-reversible identifier for an API key (for logs)."""
    if not api_key:
        return "none"
    digest = hashlib.sha256(api_key.encode("utf-8")).hexdigest()
    return digest[:12]

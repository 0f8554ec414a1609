"""
Utility modules for the auditor.

This package provides:
- Retry state and backoff computation
- Logging helpers (re-exported from shared.utils.logging)
"""

from .retry import RetryState, compute_backoff_ms
from shared.utils.logging import configure_logging, get_logger, key_fingerprint

__all__ = [
    # Retry
    "RetryState",
    "compute_backoff_ms",
    # Logging
    "configure_logging",
    "get_logger",
    "key_fingerprint",
]

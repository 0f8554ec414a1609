"""
Translation Auditor errors and exceptions.

This module contains all custom exceptions used throughout the system,
the failure classifier and the user-facing messages.
"""

from .base import AuditError, ErrorKind, RETRYABLE_KINDS
from .api_errors import (
    RemoteCallError,
    UnauthorizedError,
    BlockedException,
    QuotaExceededError,
    ServerUnavailableError,
    ModelNotFoundError,
    UnknownApiError,
    EmptyResponseError,
    MalformedResponseError,
)
from .classifier import ClassifiedError, classify_error, classify_exception, to_api_error
from .messages import user_message

__all__ = [
    'AuditError',
    'ErrorKind',
    'RETRYABLE_KINDS',
    'RemoteCallError',
    'UnauthorizedError',
    'BlockedException',
    'QuotaExceededError',
    'ServerUnavailableError',
    'ModelNotFoundError',
    'UnknownApiError',
    'EmptyResponseError',
    'MalformedResponseError',
    'ClassifiedError',
    'classify_error',
    'classify_exception',
    'to_api_error',
    'user_message',
]

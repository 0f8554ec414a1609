"""
Base exception classes for the Translation Auditor.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Every terminal or transient outcome an audit call can end in."""

    MISSING_CREDENTIAL = "MissingCredential"
    EMPTY_INPUT = "EmptyInput"
    UNAUTHORIZED = "Unauthorized"
    BLOCKED = "Blocked"
    QUOTA_EXCEEDED = "QuotaExceeded"
    SERVER_UNAVAILABLE = "ServerUnavailable"
    MODEL_NOT_FOUND = "ModelNotFound"
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"
    UNKNOWN = "Unknown"
    CANCELLED = "Cancelled"
    DEADLINE_EXCEEDED = "DeadlineExceeded"


RETRYABLE_KINDS = frozenset({ErrorKind.QUOTA_EXCEEDED, ErrorKind.SERVER_UNAVAILABLE})


class AuditError(Exception):
    """
    Base exception class for all audit-related errors.

    This serves as the parent class for all custom exceptions
    in the auditor, providing a common interface
    for error handling and logging.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, **kwargs):
        """
        Initialize the AuditError.

        Args:
            message: The error message
            **kwargs: Additional context information that subclasses can use
        """
        super().__init__(message)
        self.message = message
        self.context = kwargs

    def __str__(self):
        """Return a string representation of the error."""
        return self.message

    def to_dict(self):
        """
        Convert the exception to a dictionary for logging.

        Returns:
            dict: A dictionary containing error details
        """
        return {
            'error_type': self.__class__.__name__,
            'kind': self.kind.value,
            'message': self.message,
            'context': self.context
        }

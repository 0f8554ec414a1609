"""
API-related exceptions for the Translation Auditor.

The Gemini wrapper raises these after inspecting a failed or unusable
response; the invoker turns them into a ClassifiedError.
"""

from typing import Optional
from .base import AuditError, ErrorKind


class RemoteCallError(AuditError):
    """A failure reported by the model-serving API, already classified."""

    def __init__(self,
                 message: str,
                 status_code: Optional[int] = None,
                 model_name: Optional[str] = None,
                 api_response: Optional[str] = None):
        super().__init__(
            message,
            status_code=status_code,
            model_name=model_name,
            api_response=api_response,
        )
        self.status_code = status_code
        self.model_name = model_name
        self.api_response = api_response

    def __str__(self):
        base_msg = super().__str__()
        if self.status_code is not None:
            return f"[{self.status_code}] {base_msg}"
        return base_msg

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'status_code': self.status_code,
            'model_name': self.model_name,
            'api_response': self.api_response,
        })
        return data


class UnauthorizedError(RemoteCallError):
    """The API key was rejected (401/403 or an invalid-key marker)."""
    kind = ErrorKind.UNAUTHORIZED


class BlockedException(RemoteCallError):
    """
    Exception raised when Gemini refuses the request: a safety block on the
    prompt or a key that has been reported as leaked.
    """
    kind = ErrorKind.BLOCKED


class QuotaExceededError(RemoteCallError):
    kind = ErrorKind.QUOTA_EXCEEDED


class ServerUnavailableError(RemoteCallError):
    kind = ErrorKind.SERVER_UNAVAILABLE


class ModelNotFoundError(RemoteCallError):
    """The configured model identifier is unknown or has been retired."""
    kind = ErrorKind.MODEL_NOT_FOUND


class UnknownApiError(RemoteCallError):
    kind = ErrorKind.UNKNOWN


class EmptyResponseError(AuditError):
    """The call succeeded but carried no text payload."""
    kind = ErrorKind.EMPTY_RESPONSE


class MalformedResponseError(AuditError):
    """
    The payload could not be read as an AuditResult.

    ``retryable`` is set when the payload parsed but the empty-breakdown
    policy asks for another attempt.
    """
    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, message: str, raw_text: Optional[str] = None, retryable: bool = False):
        super().__init__(message, raw_text=raw_text, retryable=retryable)
        self.raw_text = raw_text
        self.retryable = retryable

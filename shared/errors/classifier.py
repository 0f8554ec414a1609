"""
Failure classification for remote model calls.

The SDK reports failures in several shapes (a ``code`` attribute on
``google.genai.errors.APIError``, a ``status`` on HTTP-layer errors, a status
on the wrapped ``response`` or on the ``__cause__``). Everything here reads
those shapes defensively and reduces them to one ErrorKind.
"""

from dataclasses import dataclass
from typing import Optional

from .base import AuditError, ErrorKind, RETRYABLE_KINDS
from .api_errors import (
    BlockedException,
    ModelNotFoundError,
    QuotaExceededError,
    RemoteCallError,
    ServerUnavailableError,
    UnauthorizedError,
    UnknownApiError,
)

LEAKED_KEY_MARKERS = ("leaked",)
SAFETY_MARKERS = ("safety", "blocked", "prohibited")
INVALID_KEY_MARKERS = ("api_key_invalid", "api key not valid", "invalid api key", "permission_denied")
QUOTA_MARKERS = ("quota", "rate limit", "resource_exhausted", "too many requests", "429")
UNAVAILABLE_MARKERS = ("unavailable", "overloaded", "internal error")
NOT_FOUND_MARKERS = ("not found", "not_found")

_STATUS_ATTRS = ("status", "code", "status_code")


@dataclass(frozen=True)
class ClassifiedError:
    """A single failed attempt, reduced to what the retry policy needs."""

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    retryable: bool = False


def _coerce_status(value) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _status_from(obj) -> Optional[int]:
    for attr in _STATUS_ATTRS:
        code = _coerce_status(getattr(obj, attr, None))
        if code is not None:
            return code
    return None


def extract_status_code(exc: BaseException) -> Optional[int]:
    """Status from the error itself, its ``response``, then its cause."""
    code = _status_from(exc)
    if code is not None:
        return code
    response = getattr(exc, "response", None)
    if response is not None:
        code = _status_from(response)
        if code is not None:
            return code
    cause = getattr(exc, "cause", None) or exc.__cause__
    if cause is not None and cause is not exc:
        code = _status_from(cause)
        if code is not None:
            return code
        response = getattr(cause, "response", None)
        if response is not None:
            return _status_from(response)
    return None


def extract_message(exc: BaseException) -> str:
    """Lowercase diagnostic text, including any textual status (e.g. RESOURCE_EXHAUSTED)."""
    parts = []
    message = getattr(exc, "message", None)
    parts.append(message if isinstance(message, str) and message else str(exc))
    for attr in ("status", "reason"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value and not value.isdigit():
            parts.append(value)
    cause = exc.__cause__
    if cause is not None and cause is not exc:
        parts.append(str(cause))
    return " ".join(p for p in parts if p).lower()


def _contains(message: str, markers) -> bool:
    return any(marker in message for marker in markers)


def classify_exception(exc: BaseException) -> ErrorKind:
    """Map a raw SDK/transport exception to an ErrorKind."""
    status = extract_status_code(exc)
    message = extract_message(exc)

    # A leaked key is reported as 403, but it needs the "blocked" advice, not "check your key".
    if _contains(message, LEAKED_KEY_MARKERS):
        return ErrorKind.BLOCKED
    if status in (401, 403) or _contains(message, INVALID_KEY_MARKERS):
        return ErrorKind.UNAUTHORIZED
    if _contains(message, SAFETY_MARKERS):
        return ErrorKind.BLOCKED
    if status == 429 or _contains(message, QUOTA_MARKERS):
        return ErrorKind.QUOTA_EXCEEDED
    if status in (500, 502, 503, 504) or _contains(message, UNAVAILABLE_MARKERS):
        return ErrorKind.SERVER_UNAVAILABLE
    if status == 404 or _contains(message, NOT_FOUND_MARKERS):
        return ErrorKind.MODEL_NOT_FOUND
    return ErrorKind.UNKNOWN


_ERROR_TYPES = {
    ErrorKind.BLOCKED: BlockedException,
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.QUOTA_EXCEEDED: QuotaExceededError,
    ErrorKind.SERVER_UNAVAILABLE: ServerUnavailableError,
    ErrorKind.MODEL_NOT_FOUND: ModelNotFoundError,
    ErrorKind.UNKNOWN: UnknownApiError,
}


def to_api_error(exc: BaseException, model_name: Optional[str] = None) -> RemoteCallError:
    """Wrap a raw SDK exception in the typed error matching its classification."""
    kind = classify_exception(exc)
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message:
        message = str(exc) or exc.__class__.__name__
    error_cls = _ERROR_TYPES[kind]
    return error_cls(
        message,
        status_code=extract_status_code(exc),
        model_name=model_name,
        api_response=repr(exc),
    )


def classify_error(exc: BaseException) -> ClassifiedError:
    """Classify any failure raised during one attempt."""
    if isinstance(exc, AuditError):
        kind = exc.kind
        retryable = kind in RETRYABLE_KINDS or bool(getattr(exc, "retryable", False))
        return ClassifiedError(
            kind=kind,
            message=exc.message,
            status_code=getattr(exc, "status_code", None),
            retryable=retryable,
        )

    kind = classify_exception(exc)
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message:
        message = str(exc) or exc.__class__.__name__
    return ClassifiedError(
        kind=kind,
        message=message,
        status_code=extract_status_code(exc),
        retryable=kind in RETRYABLE_KINDS,
    )

"""
User-facing text for every terminal outcome.

Each message tells the user what to do next. Raw diagnostics are logged by
the caller and only leak into the UNKNOWN message, truncated.
"""

from typing import Optional

from .base import ErrorKind

UNKNOWN_DETAIL_LIMIT = 150

_MESSAGES = {
    ErrorKind.MISSING_CREDENTIAL: (
        "API KEY MISSING: Provide an API key with the request or set "
        "GEMINI_API_KEY in your environment."
    ),
    ErrorKind.EMPTY_INPUT: (
        "INPUT MISSING: Both the English source text and the translation are "
        "required for an audit."
    ),
    ErrorKind.UNAUTHORIZED: (
        "INVALID API KEY: The key you provided is not working. Please check it "
        "in the settings."
    ),
    ErrorKind.BLOCKED: (
        "REQUEST BLOCKED: The model refused this request, either because of its "
        "safety filters or because the API key was reported as leaked. Try a "
        "different text or generate a new key."
    ),
    ErrorKind.QUOTA_EXCEEDED: (
        "QUOTA EXCEEDED (429): You have reached the request limit for this API "
        "key. Please wait 60 seconds and try again. A paid API key raises this "
        "limit."
    ),
    ErrorKind.SERVER_UNAVAILABLE: (
        "SERVICE UNAVAILABLE: The model service is temporarily overloaded. "
        "Please try again in a few minutes."
    ),
    ErrorKind.MODEL_NOT_FOUND: (
        "MODEL UNAVAILABLE: The model '{model}' could not be found. Set "
        "GEMINI_MODEL to a current model name."
    ),
    ErrorKind.EMPTY_RESPONSE: (
        "EMPTY RESPONSE: The model returned no content. Please try again."
    ),
    ErrorKind.MALFORMED_RESPONSE: (
        "MALFORMED RESPONSE: The model's answer could not be read as an audit "
        "with a word breakdown. Please try again."
    ),
    ErrorKind.CANCELLED: (
        "ANALYSIS CANCELLED: The audit was cancelled before it finished."
    ),
    ErrorKind.DEADLINE_EXCEEDED: (
        "ANALYSIS TIMED OUT: The audit did not finish within {deadline} seconds. "
        "Please try again with a shorter text."
    ),
}


def user_message(kind: ErrorKind, detail: str = "", *, model: Optional[str] = None,
                 deadline: Optional[float] = None) -> str:
    """Render the terminal string returned to callers for ``kind``."""
    if kind == ErrorKind.UNKNOWN:
        excerpt = (detail or "Unknown error").strip()
        if len(excerpt) > UNKNOWN_DETAIL_LIMIT:
            excerpt = excerpt[:UNKNOWN_DETAIL_LIMIT] + "..."
        return f"ANALYSIS FAILED: {excerpt}"
    template = _MESSAGES[kind]
    return template.format(model=model or "unknown", deadline=deadline if deadline is not None else "?")

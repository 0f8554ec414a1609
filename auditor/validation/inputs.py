"""
Input checks that run before any network call.
"""

from typing import Optional

from shared.errors import ErrorKind, user_message

from ..config.settings import AuditorSettings


def resolve_credential(credential: Optional[str], settings: Optional[AuditorSettings] = None) -> Optional[str]:
    """Caller-supplied key wins; otherwise fall back to the configured default."""
    if isinstance(credential, str) and credential.strip():
        return credential.strip()
    default = settings.gemini_api_key if settings is not None else None
    if isinstance(default, str) and default.strip():
        return default.strip()
    return None


def validate_audit_inputs(source_text: Optional[str], target_text: Optional[str],
                          credential: Optional[str]) -> Optional[str]:
    """
    Return None when the audit may proceed, otherwise the terminal message.

    ``credential`` is the already-resolved key (see resolve_credential).
    """
    if not credential or not credential.strip():
        return user_message(ErrorKind.MISSING_CREDENTIAL)
    if not source_text or not source_text.strip():
        return user_message(ErrorKind.EMPTY_INPUT)
    if not target_text or not target_text.strip():
        return user_message(ErrorKind.EMPTY_INPUT)
    return None

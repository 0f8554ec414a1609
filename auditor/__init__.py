"""
Translation Auditor: Gemini-backed accuracy feedback and word-by-word
alignment for a translation against its English source.
"""

from .config.settings import AuditorSettings, EmptyBreakdownPolicy, get_settings
from .invoker import ResilientInvoker
from .schemas.audit import AuditRequest, AuditResult, WordMapping
from .service import analyze_many, analyze_translation, analyze_translation_sync

__version__ = "1.0.0"

__all__ = [
    "AuditorSettings",
    "EmptyBreakdownPolicy",
    "get_settings",
    "ResilientInvoker",
    "AuditRequest",
    "AuditResult",
    "WordMapping",
    "analyze_translation",
    "analyze_translation_sync",
    "analyze_many",
]

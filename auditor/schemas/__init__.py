"""
Centralized schema definitions for structured output.

This module contains:
- Pydantic models for type safety and validation
- JSON schema builders for Gemini Structured Output API
- Response parsing utilities
"""

from .audit import (
    AuditRequest,
    AuditResult,
    WordMapping,
    make_audit_result_schema,
    make_word_mapping_schema,
    parse_audit_result_response,
)

__all__ = [
    "AuditRequest",
    "AuditResult",
    "WordMapping",
    "make_audit_result_schema",
    "make_word_mapping_schema",
    "parse_audit_result_response",
]

"""
Audit schemas for structured output.

This module centralizes:
- Pydantic models for the audit request and the structured audit result
- JSON schema builder for the Gemini Structured Output API
- Wire (camelCase JSON) encode/decode helpers

Field names on the wire are camelCase because the schema is what the model
sees; Python code uses the snake_case attribute names.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --------------------
# Pydantic Models
# --------------------
class WordMapping(BaseModel):
    """One unit of the target text aligned to its source counterpart."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    target_word: str = Field(..., alias="targetWord", description="Word or phrase from the translation")
    source_equivalent: str = Field(..., alias="sourceEquivalent", description="Matching English word or phrase")
    context: str = Field(..., description="Grammatical role or usage note")


class AuditResult(BaseModel):
    """Structured audit returned by the model."""

    model_config = ConfigDict(populate_by_name=True)

    feedback: str = Field(..., description="Prose summary of accuracy and style issues")
    word_breakdown: List[WordMapping] = Field(
        ...,
        alias="wordBreakdown",
        description="Alignment in target-text order",
    )

    def has_breakdown(self) -> bool:
        return len(self.word_breakdown) > 0

    def to_wire(self) -> Dict[str, Any]:
        """Dump with the camelCase field names used in the response schema."""
        return self.model_dump(by_alias=True)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_wire(), ensure_ascii=False, **kwargs)

    @classmethod
    def from_wire(cls, payload: Union[Dict[str, Any], str]) -> "AuditResult":
        """Validate a decoded payload (or a JSON string) into an AuditResult."""
        if isinstance(payload, str):
            return cls.model_validate_json(payload)
        return cls.model_validate(payload)


class AuditRequest(BaseModel):
    """Inputs of one audit call."""

    model_config = ConfigDict(populate_by_name=True)

    source_text: str = Field(..., alias="sourceText")
    target_text: str = Field(..., alias="targetText")
    target_language_name: str = Field(..., alias="targetLanguageName")
    credential: Optional[str] = Field(default=None, repr=False)


# --------------------
# Response schema (JSON Schema for Gemini)
# --------------------
def make_word_mapping_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "targetWord": {
                "type": "string",
                "description": "A word or short phrase exactly as it appears in the translation",
            },
            "sourceEquivalent": {
                "type": "string",
                "description": "The English word or phrase it renders",
            },
            "context": {
                "type": "string",
                "description": "Grammatical role or usage note (e.g. 'verb, 1st person plural')",
            },
        },
        "required": ["targetWord", "sourceEquivalent", "context"],
        "propertyOrdering": ["targetWord", "sourceEquivalent", "context"],
    }


def make_audit_result_schema() -> Dict[str, Any]:
    """
    Create JSON schema for the audit response.

    Gemini Structured Output uses a simplified schema subset. Avoid unsupported
    keywords like minItems/minimum; the prompt asks for a non-empty breakdown
    instead.
    """
    return {
        "type": "object",
        "properties": {
            "feedback": {
                "type": "string",
                "description": "Summary of mistranslations, omissions and tone shifts",
            },
            "wordBreakdown": {
                "type": "array",
                "description": "Alignment of every word in the translation, in target-text order",
                "items": make_word_mapping_schema(),
            },
        },
        "required": ["feedback", "wordBreakdown"],
        "propertyOrdering": ["feedback", "wordBreakdown"],
    }


# --------------------
# Helper Functions
# --------------------
def parse_audit_result_response(response: Dict[str, Any]) -> AuditResult:
    """Parse JSON response into AuditResult model."""
    return AuditResult.from_wire(response)

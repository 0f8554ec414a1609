import json
import re
from typing import Any, Callable, Optional

from google import genai
from google.genai import types as genai_types
from pydantic import ValidationError

from shared.errors import (
    AuditError,
    BlockedException,
    EmptyResponseError,
    MalformedResponseError,
    to_api_error,
)
from shared.utils.logging import get_logger, key_fingerprint

from ..config.settings import EmptyBreakdownPolicy
from ..schemas.audit import AuditResult, make_audit_result_schema

logger = get_logger(__name__)

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class GeminiAuditModel:
    """
    A wrapper around the Google Gemini API that performs exactly one
    structured audit call per ``generate_audit`` and reports every failure
    as a typed AuditError. Retrying is the invoker's job.
    """
    def __init__(
        self,
        api_key: str | None,
        model_name: str,
        safety_settings: list | None = None,
        generation_config: dict | None = None,
        *,
        client: Any = None,
        client_factory: Callable[[str], Any] | None = None,
        empty_breakdown_policy: EmptyBreakdownPolicy = EmptyBreakdownPolicy.RETRY,
    ):
        """
        Initializes the Gemini model client.

        Args:
            api_key: The resolved API key; a fresh client is built from it
            model_name: The model name to use
            safety_settings: Safety settings for the model
            generation_config: Generation configuration
            client: Pre-built client (tests); skips the factory
            client_factory: Builds a client from an API key
            empty_breakdown_policy: How to treat an audit with no word breakdown
        """
        if client is None:
            if not isinstance(api_key, str) or not api_key.strip():
                raise ValueError("API key required.")
            client = (client_factory or default_client_factory)(api_key.strip())
        self.client = client
        self.model_name = model_name
        self.safety_settings = safety_settings or []
        self.generation_config = generation_config or {}
        self.empty_breakdown_policy = EmptyBreakdownPolicy(empty_breakdown_policy)
        logger.debug(
            "GeminiAuditModel initialized with model=%s key=%s",
            model_name,
            key_fingerprint(api_key),
        )

    def _build_generation_config(self, overrides: dict | None = None):
        """Merge base generation_config with overrides and embed safety settings.

        Returns a typed GenerateContentConfig, or the plain dict when the typed
        construction rejects a field (the SDK coerces dicts internally).
        """
        base = dict(self.generation_config)
        if self.safety_settings:
            base["safety_settings"] = [
                genai_types.SafetySetting(category=s["category"], threshold=s["threshold"])
                for s in self.safety_settings
            ]
        if overrides:
            base.update(overrides)
        try:
            return genai_types.GenerateContentConfig(**base)
        except (TypeError, ValueError) as exc:
            logger.debug("Falling back to dict generation config: %s", exc)
            return base

    async def generate_audit(self, prompt: str, response_schema: dict | None = None,
                             model_name: str | None = None) -> AuditResult:
        """
        Issue one structured-generation call and parse it into an AuditResult.

        Raises:
            RemoteCallError subclasses for API failures, BlockedException,
            EmptyResponseError or MalformedResponseError for unusable payloads.
        """
        model = model_name or self.model_name
        config = self._build_generation_config({
            "response_mime_type": "application/json",
            "response_schema": response_schema or make_audit_result_schema(),
        })

        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except AuditError:
            raise
        except Exception as exc:
            raise to_api_error(exc, model_name=model) from exc

        response_text = self._extract_text(response)
        if not response_text:
            feedback = getattr(response, "prompt_feedback", None)
            block_reason = getattr(feedback, "block_reason", None) if feedback is not None else None
            if block_reason:
                raise BlockedException(
                    f"Prompt blocked by safety settings. Reason: {block_reason}",
                    model_name=model,
                    api_response=str(feedback),
                )
            raise EmptyResponseError("Empty response from AI", model_name=model)

        result = self.parse_audit_payload(response_text)

        if not result.has_breakdown():
            if self.empty_breakdown_policy == EmptyBreakdownPolicy.RETRY:
                raise MalformedResponseError("Audit returned an empty word breakdown.",
                                             raw_text=response_text, retryable=True)
            if self.empty_breakdown_policy == EmptyBreakdownPolicy.FAIL:
                raise MalformedResponseError("Audit returned an empty word breakdown.",
                                             raw_text=response_text)
            logger.info("Accepting audit with an empty word breakdown (model=%s)", model)

        return result

    async def aclose(self) -> None:
        """Release the client's async and sync HTTP resources when the SDK exposes close hooks."""
        aio = getattr(self.client, "aio", None)
        aclose = getattr(aio, "aclose", None)
        if aclose is not None:
            await aclose()
        close = getattr(self.client, "close", None)
        if close is not None:
            close()

    @staticmethod
    def _extract_text(response) -> Optional[str]:
        if response is None:
            return None
        response_text = None
        if hasattr(response, "text"):
            try:
                response_text = response.text() if callable(response.text) else response.text
            except (AttributeError, ValueError):
                response_text = None

        # Fallback: assemble from candidates/parts
        if not response_text:
            candidates = getattr(response, "candidates", None) or []
            for candidate in candidates:
                content = getattr(candidate, "content", None)
                parts = getattr(content, "parts", None) or []
                joined = "".join(getattr(p, "text", None) or "" for p in parts)
                if joined:
                    response_text = joined
                    break

        if isinstance(response_text, str) and response_text.strip():
            return response_text
        return None

    @staticmethod
    def _clean_json_text(raw: str) -> str:
        cleaned = raw.strip()
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
        return cleaned.strip()

    @classmethod
    def parse_audit_payload(cls, raw_text: str) -> AuditResult:
        """Strip code fences, decode (twice when double-encoded) and validate."""
        cleaned = cls._clean_json_text(raw_text)
        try:
            payload = json.loads(cleaned)
            if isinstance(payload, str):
                payload = json.loads(cls._clean_json_text(payload))
        except json.JSONDecodeError as exc:
            cls._log_json_parse_error(cleaned, exc)
            raise MalformedResponseError(f"Failed to parse JSON response: {exc}", raw_text=raw_text) from exc

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(payload).__name__}", raw_text=raw_text
            )

        try:
            return AuditResult.from_wire(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"Response does not match the audit schema: {exc}",
                                         raw_text=raw_text) from exc

    @staticmethod
    def _log_json_parse_error(text: str, exc: json.JSONDecodeError) -> None:
        length = len(text)
        pos = exc.pos if 0 <= exc.pos <= length else 0
        start = max(0, pos - 120)
        end = min(length, pos + 120)
        logger.warning("JSON parsing error: %s (response length %d)", exc, length)
        logger.debug("Error context [%d:%d] (pos=%d): %s", start, end, pos, text[start:end])

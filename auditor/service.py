"""
Public entry points of the Translation Auditor.

``analyze_translation`` returns an AuditResult on success and a
human-readable string on any terminal failure; callers tell them apart with
``isinstance(result, AuditResult)``.
"""

import asyncio
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Union

from shared.errors import classify_error, user_message
from shared.utils.logging import get_logger, key_fingerprint

from .config.loader import load_config
from .config.settings import AuditorSettings, get_settings
from .invoker import ResilientInvoker
from .models.gemini import GeminiAuditModel
from .prompts.builder import AuditPromptBuilder
from .schemas.audit import AuditRequest, AuditResult, make_audit_result_schema
from .validation.inputs import resolve_credential, validate_audit_inputs

logger = get_logger(__name__)

AuditOutcome = Union[AuditResult, str]


async def analyze_translation(
    source_text: str,
    target_text: str,
    target_language: str,
    credential: Optional[str] = None,
    *,
    settings: Optional[AuditorSettings] = None,
    cancel_event: Optional[asyncio.Event] = None,
    client_factory: Optional[Callable[[str], Any]] = None,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    rand: Optional[Callable[[], float]] = None,
) -> AuditOutcome:
    """
    Audit ``target_text`` against the English ``source_text``.

    Args:
        source_text: English source text
        target_text: Translation under audit
        target_language: Name of the translation's language (e.g. "Spanish")
        credential: Gemini API key; falls back to GEMINI_API_KEY
        settings: Settings override (defaults to the process-wide settings)
        cancel_event: Set it to abort the audit between or during attempts
        client_factory: Builds the SDK client from the resolved key
        sleep, rand: Backoff hooks, mainly for tests

    Returns:
        AuditResult on success, otherwise an actionable error message.
    """
    settings = settings or get_settings()
    api_key = resolve_credential(credential, settings)

    problem = validate_audit_inputs(source_text, target_text, api_key)
    if problem:
        logger.info("Audit rejected before any network call: %s", problem.split(":", 1)[0])
        return problem

    config = load_config(settings)
    prompt = AuditPromptBuilder().build_audit_prompt(source_text, target_text, target_language)

    try:
        model = GeminiAuditModel(
            api_key=api_key,
            model_name=config["gemini_model_name"],
            safety_settings=config["safety_settings"],
            generation_config=config["generation_config"],
            client_factory=client_factory,
            empty_breakdown_policy=config["empty_breakdown_policy"],
        )
    except Exception as exc:
        classified = classify_error(exc)
        logger.error("Could not create Gemini client (key=%s): %s", key_fingerprint(api_key), exc)
        return user_message(classified.kind, classified.message, model=config["gemini_model_name"])

    invoker_options = {}
    if sleep is not None:
        invoker_options["sleep"] = sleep
    if rand is not None:
        invoker_options["rand"] = rand

    invoker = ResilientInvoker(
        model,
        model_candidates=config["model_candidates"],
        max_retries=config["max_retries"],
        base_delay_ms=config["base_delay_ms"],
        max_jitter_ms=config["max_jitter_ms"],
        deadline_seconds=config["deadline_seconds"],
        **invoker_options,
    )

    logger.info("Auditing %s translation (%d source chars, %d target chars, key=%s)",
                target_language, len(source_text), len(target_text), key_fingerprint(api_key))
    try:
        return await invoker.invoke(prompt, make_audit_result_schema(), cancel_event=cancel_event)
    finally:
        try:
            await model.aclose()
        except Exception as exc:  # pragma: no cover - best effort cleanup
            logger.debug("Failed to close Gemini client: %s", exc)


def analyze_translation_sync(
    source_text: str,
    target_text: str,
    target_language: str,
    credential: Optional[str] = None,
    **kwargs,
) -> AuditOutcome:
    """Blocking wrapper around analyze_translation for synchronous callers."""
    return asyncio.run(analyze_translation(source_text, target_text, target_language, credential, **kwargs))


async def analyze_many(
    requests: Iterable[AuditRequest],
    *,
    concurrency: int = 4,
    **kwargs,
) -> List[AuditOutcome]:
    """
    Run several independent audits concurrently.

    At most ``concurrency`` audits are in flight at once; results come back
    in the order of ``requests``.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run_one(request: AuditRequest) -> AuditOutcome:
        async with semaphore:
            return await analyze_translation(
                request.source_text,
                request.target_text,
                request.target_language_name,
                request.credential,
                **kwargs,
            )

    return list(await asyncio.gather(*(run_one(r) for r in requests)))

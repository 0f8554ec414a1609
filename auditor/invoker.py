"""
Resilient invocation of the audit model.

``ResilientInvoker.invoke`` is total: it always settles with either an
AuditResult or a user-facing string. Only outer task cancellation
(``asyncio.CancelledError``) escapes.
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional, Sequence, Union

from shared.errors import ClassifiedError, ErrorKind, classify_error, user_message
from shared.utils.logging import get_logger

from .models.gemini import GeminiAuditModel
from .schemas.audit import AuditResult
from .utils.retry import RetryState

logger = get_logger(__name__)


class _Interrupted(Exception):
    """Raised inside the loop when the cancel signal fires or the deadline passes."""

    def __init__(self, kind: ErrorKind):
        super().__init__(kind.value)
        self.kind = kind


class ResilientInvoker:
    """
    Bounded exponential-backoff retry around GeminiAuditModel.generate_audit.

    Quota and server-unavailable failures (and empty breakdowns under the
    ``retry`` policy) are retried up to ``max_retries`` times; everything
    else is surfaced on first occurrence. A missing model moves on to the
    next configured fallback model without spending the retry budget.
    """

    def __init__(
        self,
        model: GeminiAuditModel,
        *,
        model_candidates: Optional[Sequence[str]] = None,
        max_retries: int = 3,
        base_delay_ms: int = 2000,
        max_jitter_ms: int = 500,
        deadline_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.model = model
        self.model_candidates = list(model_candidates or [model.model_name])
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_jitter_ms = max_jitter_ms
        self.deadline_seconds = deadline_seconds
        self._sleep = sleep
        self._rand = rand
        self._clock = clock

    async def invoke(self, prompt: str, response_schema: Optional[dict] = None,
                     cancel_event: Optional[asyncio.Event] = None) -> Union[AuditResult, str]:
        state = RetryState(
            max_retries=self.max_retries,
            base_delay_ms=self.base_delay_ms,
            max_jitter_ms=self.max_jitter_ms,
        )
        started = self._clock()
        model_index = 0
        calls = 0

        while True:
            model_name = self.model_candidates[model_index]
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Audit cancelled before attempt %d", calls + 1)
                return user_message(ErrorKind.CANCELLED)

            calls += 1
            try:
                result = await self._race(
                    self.model.generate_audit(prompt, response_schema, model_name=model_name),
                    cancel_event,
                    self._remaining(started),
                )
                logger.info(
                    "Audit succeeded on attempt %d (model=%s, %d word mappings)",
                    calls, model_name, len(result.word_breakdown),
                )
                return result
            except _Interrupted as interrupt:
                return self._interrupted(interrupt.kind, calls)
            except Exception as exc:
                classified = classify_error(exc)

            logger.warning(
                "Gemini error (attempt %d, retry %d/%d, model=%s): %s [%s]",
                calls, state.attempt, state.max_retries, model_name,
                classified.message, classified.kind.value,
            )

            if classified.kind == ErrorKind.MODEL_NOT_FOUND and model_index + 1 < len(self.model_candidates):
                model_index += 1
                logger.warning("Model %s not found; falling back to %s",
                               model_name, self.model_candidates[model_index])
                continue

            if not classified.retryable:
                return self._terminal(classified, model_name)

            if not state.can_retry():
                logger.error("Retries exhausted after %d attempts (%s, %.0fms total backoff)",
                             calls, classified.kind.value, sum(state.delays_ms))
                return self._terminal(classified, model_name)

            delay_ms = state.next_delay_ms(self._rand)
            remaining = self._remaining(started)
            if remaining is not None and delay_ms / 1000.0 >= remaining:
                return self._interrupted(ErrorKind.DEADLINE_EXCEEDED, calls)

            logger.warning("%s. Retrying in %.0fms...", classified.kind.value, delay_ms)
            try:
                await self._race(self._sleep(delay_ms / 1000.0), cancel_event, None)
            except _Interrupted as interrupt:
                return self._interrupted(interrupt.kind, calls)
            state.record_retry(delay_ms)

    def _remaining(self, started: float) -> Optional[float]:
        if self.deadline_seconds is None:
            return None
        return max(0.0, self.deadline_seconds - (self._clock() - started))

    async def _race(self, awaitable, cancel_event: Optional[asyncio.Event], timeout: Optional[float]):
        """Await ``awaitable`` unless the cancel signal fires or ``timeout`` elapses first."""
        task = asyncio.ensure_future(awaitable)
        waiters = {task}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)
        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [w for w in waiters if not w.done()]
            for waiter in pending:
                waiter.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if task in done:
            return task.result()
        if cancel_waiter is not None and cancel_waiter in done:
            raise _Interrupted(ErrorKind.CANCELLED)
        raise _Interrupted(ErrorKind.DEADLINE_EXCEEDED)

    def _interrupted(self, kind: ErrorKind, calls: int) -> str:
        if kind == ErrorKind.CANCELLED:
            logger.info("Audit cancelled after %d attempt(s)", calls)
        else:
            logger.error("Audit deadline of %ss exceeded after %d attempt(s)", self.deadline_seconds, calls)
        return user_message(kind, deadline=self.deadline_seconds)

    def _terminal(self, classified: ClassifiedError, model_name: str) -> str:
        logger.error("Audit failed: %s (status=%s): %s",
                     classified.kind.value, classified.status_code, classified.message)
        return user_message(classified.kind, classified.message, model=model_name)

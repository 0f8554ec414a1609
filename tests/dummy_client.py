"""Stand-ins for the google-genai client used across the tests."""

import asyncio


SUCCESS_PAYLOAD = (
    '{"feedback":"ok","wordBreakdown":'
    '[{"targetWord":"Hola","sourceEquivalent":"Hello","context":"greeting"}]}'
)


class FakeApiError(Exception):
    """Shaped like google.genai.errors.APIError: numeric ``code``, textual ``status``."""

    def __init__(self, code, message, status=None):
        super().__init__(f"{code} {status}. {message}")
        self.code = code
        self.status = status
        self.message = message


class DummyPromptFeedback:
    def __init__(self, block_reason):
        self.block_reason = block_reason


class DummyPart:
    def __init__(self, text=None):
        self.text = text


class DummyContent:
    def __init__(self, parts):
        self.parts = parts


class DummyCandidate:
    def __init__(self, parts):
        self.content = DummyContent(parts)


class DummyResponse:
    def __init__(self, *, text=None, prompt_feedback=None, parts=None):
        self.text = text
        self.prompt_feedback = prompt_feedback
        self.candidates = [DummyCandidate(parts)] if parts else []
        self.usage_metadata = None


class Hang:
    """Plan action: block until cancelled."""


class DummyModels:
    """Plays back ``plan`` one action per call; the last action repeats."""

    def __init__(self, plan):
        self._plan = list(plan)
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if not self._plan:
            raise RuntimeError("No planned action")
        action = self._plan.pop(0) if len(self._plan) > 1 else self._plan[0]
        if isinstance(action, Hang):
            await asyncio.Event().wait()
        if isinstance(action, BaseException):
            raise action
        if isinstance(action, str):
            return DummyResponse(text=action)
        return action


class DummyAio:
    def __init__(self, models):
        self.models = models


class DummyClient:
    def __init__(self, plan):
        self.models = DummyModels(plan)
        self.aio = DummyAio(self.models)

    @property
    def calls(self):
        return self.models.calls


class RecordingFactory:
    """client_factory that remembers which keys it was given."""

    def __init__(self, plan):
        self.client = DummyClient(plan)
        self.keys = []

    def __call__(self, api_key):
        self.keys.append(api_key)
        return self.client


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)

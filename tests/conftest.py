import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from auditor.config import settings as settings_module  # noqa: E402
from auditor.config.settings import AuditorSettings  # noqa: E402

AUDITOR_ENV_VARS = (
    "GEMINI_API_KEY",
    "API_KEY",
    "GEMINI_MODEL",
    "GEMINI_FALLBACK_MODELS",
    "AUDIT_TEMPERATURE",
    "AUDIT_MAX_RETRIES",
    "AUDIT_BASE_DELAY_MS",
    "AUDIT_MAX_JITTER_MS",
    "AUDIT_EMPTY_BREAKDOWN_POLICY",
    "AUDIT_DEADLINE_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Tests never see a developer's real key or overrides."""
    for name in AUDITOR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    # load_config() calls load_dotenv(); keep it from reading a local .env
    monkeypatch.setattr("auditor.config.loader.load_dotenv", lambda *a, **k: False)
    yield


@pytest.fixture
def make_settings():
    def factory(**overrides) -> AuditorSettings:
        values = {
            "gemini_api_key": None,
            "model_name": "test-model",
            "fallback_models": [],
            "max_retries": 3,
            "base_delay_ms": 2000,
            "max_jitter_ms": 500,
        }
        values.update(overrides)
        return AuditorSettings(_env_file=None, **values)

    return factory

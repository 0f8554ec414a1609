from typing import Optional

from dotenv import load_dotenv

from .settings import AuditorSettings, get_settings


def load_config(settings: Optional[AuditorSettings] = None) -> dict:
    """Loads model, generation and retry configuration for an audit call."""
    load_dotenv()
    settings = settings or get_settings()

    # Audited texts may quote violent or explicit passages; only block high-risk content
    safety_settings = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_ONLY_HIGH"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_ONLY_HIGH"},
    ]

    # Low temperature keeps the alignment table stable between retries
    generation_config = {
        "temperature": settings.temperature,
        "top_p": 0.8,
        "max_output_tokens": 8192,
    }

    return {
        "gemini_model_name": settings.model_name,
        "model_candidates": settings.model_candidates,
        "safety_settings": safety_settings,
        "generation_config": generation_config,
        "max_retries": settings.max_retries,
        "base_delay_ms": settings.base_delay_ms,
        "max_jitter_ms": settings.max_jitter_ms,
        "empty_breakdown_policy": settings.empty_breakdown_policy,
        "deadline_seconds": settings.deadline_seconds,
    }

from .gemini import GeminiAuditModel, default_client_factory

__all__ = ["GeminiAuditModel", "default_client_factory"]

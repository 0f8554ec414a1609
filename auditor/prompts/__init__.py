from .builder import AuditPromptBuilder
from .manager import PromptManager

__all__ = ["AuditPromptBuilder", "PromptManager"]

from typing import Optional

from .manager import PromptManager


class AuditPromptBuilder:
    """
    Builds the audit prompt using a centralized template.
    """
    def __init__(self, template: Optional[str] = None):
        """
        Initializes the builder with a specific prompt template.

        Args:
            template: The prompt template string (defaults to PromptManager.AUDIT_MAIN).
        """
        self.template = template or PromptManager.AUDIT_MAIN

    def build_audit_prompt(self, source_text: str, target_text: str, target_language: str) -> str:
        """
        Builds the final prompt by filling the template with the audit inputs.

        Args:
            source_text: The English source text.
            target_text: The translation under audit.
            target_language: Human-readable name of the translation's language.

        Returns:
            The fully formatted prompt string ready for the AI model.
        """
        context_data = {
            "source_text": self._quote_safe(source_text),
            "target_text": self._quote_safe(target_text),
            "target_language": target_language.strip() or "Target",
        }

        try:
            return self.template.format(**context_data)
        except KeyError as e:
            raise KeyError(f"The placeholder '{{{e.args[0]}}}' in the template was not found in the provided context data.")

    @staticmethod
    def _quote_safe(text: str) -> str:
        """Texts are embedded in double quotes; escape the quotes they contain."""
        return text.strip().replace('"', '\\"')

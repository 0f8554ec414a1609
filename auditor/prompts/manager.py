import yaml
import os


class PromptManager:
    """
    Manages all prompts used by the auditor.
    Prompts live in prompts.yaml so they can be edited without touching code.
    """

    # Load prompts at class level
    _prompts_path = os.path.join(os.path.dirname(__file__), "prompts.yaml")
    with open(_prompts_path, "r", encoding="utf-8") as f:
        _prompts = yaml.safe_load(f)

    # --- Translation Audit Prompts ---
    AUDIT_MAIN = _prompts["audit"]["main"]

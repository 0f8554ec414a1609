from .settings import AuditorSettings, EmptyBreakdownPolicy, get_settings, reload_settings
from .loader import load_config

__all__ = [
    "AuditorSettings",
    "EmptyBreakdownPolicy",
    "get_settings",
    "reload_settings",
    "load_config",
]

"""Settings persistence."""

from .settings import CompletionSettings, SettingsStore, get_settings_store, load_completion_settings

__all__ = ["CompletionSettings", "SettingsStore", "get_settings_store", "load_completion_settings"]

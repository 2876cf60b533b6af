"""Configuration package."""

from habit_tracker.config.settings import (
    AppSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from habit_tracker.config.predefined import (
    PredefinedHabit,
    get_predefined_habits,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
    "PredefinedHabit",
    "get_predefined_habits",
]

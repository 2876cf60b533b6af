"""Services package."""

from habit_tracker.services.storage import (
    AccountStorageInterface,
    InMemoryAccountStorage,
    JsonFileAccountStorage,
    StorageDecodeError,
    StorageError,
    UnknownHabitTypeError,
)

__all__ = [
    # Storage services
    "AccountStorageInterface",
    "InMemoryAccountStorage",
    "JsonFileAccountStorage",
    "StorageDecodeError",
    "StorageError",
    "UnknownHabitTypeError",
]

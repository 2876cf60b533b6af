"""
Storage Services Package

Provides the abstract account storage interface, the tagged roster codec,
and concrete implementations (JSON file and in-memory).
"""

from habit_tracker.services.storage.interface import (
    AccountStorageInterface,
    StorageDecodeError,
    StorageError,
    UnknownHabitTypeError,
)
from habit_tracker.services.storage.codec import (
    BOOLEAN_TYPE_TAG,
    HABIT_TYPE_FIELD,
    QUANTITATIVE_TYPE_TAG,
    decode_accounts,
    encode_accounts,
)
from habit_tracker.services.storage.json_file import JsonFileAccountStorage
from habit_tracker.services.storage.memory import InMemoryAccountStorage

__all__ = [
    # Interface
    "AccountStorageInterface",
    # Exceptions
    "StorageDecodeError",
    "StorageError",
    "UnknownHabitTypeError",
    # Codec
    "BOOLEAN_TYPE_TAG",
    "HABIT_TYPE_FIELD",
    "QUANTITATIVE_TYPE_TAG",
    "decode_accounts",
    "encode_accounts",
    # Implementations
    "InMemoryAccountStorage",
    "JsonFileAccountStorage",
]

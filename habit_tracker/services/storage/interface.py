"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON file as the default backend
2. Use in-memory storage for testing
3. Swap in another backend later without touching the manager

The interface is intentionally tiny: the manager always reads the whole
roster once and writes the whole roster back after every change.
"""

from abc import ABC, abstractmethod

from habit_tracker.models.account import Account


class AccountStorageInterface(ABC):
    """
    Abstract interface for account roster storage.

    Any storage implementation must round-trip accounts losslessly,
    including the concrete variant of every habit.
    """

    @abstractmethod
    def load(self) -> list[Account]:
        """
        Load every stored account.

        Returns:
            List of accounts. A missing or empty store yields [].

        Raises:
            StorageError: If the store exists but cannot be read
            UnknownHabitTypeError: If a habit record has an unrecognized type tag
        """
        pass

    @abstractmethod
    def save(self, accounts: list[Account]) -> None:
        """
        Replace the stored roster with `accounts`.

        Args:
            accounts: The full roster to persist

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageDecodeError(StorageError):
    """Stored data could not be turned back into models."""
    pass


class UnknownHabitTypeError(StorageDecodeError):
    """A habit record carried a missing or unrecognized type discriminator."""

    def __init__(self, type_tag: object):
        self.type_tag = type_tag
        super().__init__(f"Unrecognized habit type discriminator: {type_tag!r}")

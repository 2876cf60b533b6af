"""
In-Memory Storage

Keeps the roster as an encoded snapshot instead of live objects, so it
goes through the same codec as the file store and callers can never
mutate "stored" data by holding on to a model.
"""

import copy
from typing import Any, Optional

from habit_tracker.models.account import Account
from habit_tracker.services.storage.codec import decode_accounts, encode_accounts
from habit_tracker.services.storage.interface import AccountStorageInterface


class InMemoryAccountStorage(AccountStorageInterface):
    """Account storage for tests and throwaway sessions."""

    def __init__(self, snapshot: Optional[list[dict[str, Any]]] = None):
        self._snapshot: list[dict[str, Any]] = copy.deepcopy(snapshot or [])
        self.save_count = 0

    def load(self) -> list[Account]:
        return decode_accounts(copy.deepcopy(self._snapshot))

    def save(self, accounts: list[Account]) -> None:
        self._snapshot = encode_accounts(accounts)
        self.save_count += 1

    @property
    def snapshot(self) -> list[dict[str, Any]]:
        """A copy of the last saved, encoded roster."""
        return copy.deepcopy(self._snapshot)

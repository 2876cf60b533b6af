"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is the default backend because:
1. Users can open and read their data directly
2. No database setup required
3. Backups are a file copy

TRADEOFFS:
- The whole roster is rewritten on every change (fine for personal use)
- No locking: one process owns the file at a time
- No partial reads: the whole file is loaded at startup

Writes go to a temporary sibling file first and are moved over the
target with os.replace, so a crash mid-write never leaves a truncated
data file behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from habit_tracker.config.settings import StorageSettings
from habit_tracker.log import get_logger
from habit_tracker.models.account import Account
from habit_tracker.services.storage.codec import decode_accounts, encode_accounts
from habit_tracker.services.storage.interface import (
    AccountStorageInterface,
    StorageDecodeError,
    StorageError,
)


class JsonFileAccountStorage(AccountStorageInterface):
    """
    JSON file implementation of account storage.

    The file holds a single JSON array of account objects.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        settings: Optional[StorageSettings] = None,
    ):
        self._settings = settings or StorageSettings()
        self._path = Path(path) if path is not None else self._settings.data_file_path
        self._logger = get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Account]:
        """Load all accounts. A missing or blank file is an empty roster."""
        if not self._path.exists():
            self._logger.info("store_missing", path=str(self._path))
            return []

        try:
            text = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageDecodeError(
                f"Data file {self._path} is not valid UTF-8: {e}"
            ) from e
        except OSError as e:
            raise StorageError(f"Failed to read data file {self._path}: {e}") from e

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageDecodeError(
                f"Data file {self._path} is not valid JSON: {e}"
            ) from e

        accounts = decode_accounts(data)
        self._logger.info(
            "store_loaded",
            path=str(self._path),
            account_count=len(accounts),
        )
        return accounts

    def save(self, accounts: list[Account]) -> None:
        """Serialize the roster and atomically replace the data file."""
        try:
            payload = json.dumps(
                encode_accounts(accounts),
                indent=self._settings.json_indent or None,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to serialize accounts: {e}") from e

        retrying = Retrying(
            stop=stop_after_attempt(self._settings.save_retry_attempts),
            wait=wait_exponential(
                multiplier=self._settings.save_retry_wait_seconds,
                max=self._settings.save_retry_wait_seconds * 8,
            ),
            retry=retry_if_exception_type(OSError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(payload)
        except OSError as e:
            raise StorageError(f"Failed to write data file {self._path}: {e}") from e

        self._logger.debug(
            "store_saved",
            path=str(self._path),
            account_count=len(accounts),
        )

    def _write(self, payload: str) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=directory,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def _log_retry(self, retry_state) -> None:
        self._logger.warning(
            "store_save_retry",
            path=str(self._path),
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()),
        )

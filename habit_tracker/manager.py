"""
Habit Manager

The single owner of the account roster and of every write to it.

DESIGN DECISION: The manager enforces the invariants the models do not:
- Habit and entry IDs are allocated here and nowhere else
- At most one entry per habit per calendar day (log_progress upserts)
- is_target_met is recomputed from the habit's rule on every write
- Every mutation is persisted synchronously before the call returns

Persistence failures are NOT rolled back. If save() raises, the in-memory
change has already happened and the caller sees the StorageError:
"data changed but may not be saved".
"""

from datetime import date, datetime
from typing import Callable, Iterable, Optional, Union

from habit_tracker.config.predefined import PredefinedHabit
from habit_tracker.log import get_logger
from habit_tracker.models.account import Account
from habit_tracker.models.habit import (
    BooleanVariant,
    Habit,
    HabitEntry,
    QuantitativeVariant,
)
from habit_tracker.services.storage import AccountStorageInterface, StorageError


class HabitManagerError(Exception):
    """Base exception for manager operations."""
    pass


class NoActiveSessionError(HabitManagerError):
    """A mutating call was made while nobody is logged in."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no account is logged in")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class HabitManager:
    """
    Owns accounts, the active session and all habit mutations.

    Flow:
    1. Construct → roster is loaded once from storage
    2. register / login → pick the active account
    3. create_habit / delete_habit / log_progress → mutate + persist
    4. logout → session cleared

    ID counters live only for the session. They are re-derived from the
    account's data on every login.
    """

    def __init__(
        self,
        storage: AccountStorageInterface,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the manager.

        Args:
            storage: Backend holding the account roster
            now: Clock used to stamp habit creation (defaults to datetime.now)

        Raises:
            StorageError: If the roster cannot be loaded
        """
        self._storage = storage
        self._now = now or datetime.now
        self._logger = get_logger(__name__)

        self._accounts: list[Account] = storage.load()
        self._current: Optional[Account] = None
        self._next_habit_id = 1
        self._next_entry_id = 1

        self._logger.info("manager_ready", account_count=len(self._accounts))

    # =========================================================================
    # SESSION
    # =========================================================================

    def register(self, username: str, password: str) -> bool:
        """
        Create a new account.

        Returns False without changing anything when either field is
        blank or the username is taken (ignoring case).
        """
        if _is_blank(username) or _is_blank(password):
            self._logger.info("registration_rejected", reason="blank_field")
            return False

        if self._find_account(username) is not None:
            self._logger.info(
                "registration_rejected",
                reason="username_taken",
                username=username,
            )
            return False

        account = Account(
            id=max((a.id for a in self._accounts), default=0) + 1,
            username=username,
            password=password,
        )
        self._accounts.append(account)
        self._persist("register")

        self._logger.info("account_registered", account_id=account.id, username=username)
        return True

    def login(self, username: str, password: str) -> bool:
        """
        Activate the account matching username (any case) and password (exact).

        On success the habit and entry ID counters are re-derived from
        the account's current data.
        """
        if _is_blank(username) or _is_blank(password):
            self._logger.info("login_failed", reason="blank_field")
            return False

        account = self._find_account(username)
        if account is None or account.password != password:
            self._logger.info("login_failed", reason="bad_credentials", username=username)
            return False

        self._current = account
        self._next_habit_id = account.max_habit_id + 1
        self._next_entry_id = account.max_entry_id + 1

        self._logger.info(
            "login_succeeded",
            account_id=account.id,
            next_habit_id=self._next_habit_id,
            next_entry_id=self._next_entry_id,
        )
        return True

    def logout(self) -> None:
        """Clear the session. Safe to call when nobody is logged in."""
        if self._current is not None:
            self._logger.info("logged_out", account_id=self._current.id)
        self._current = None
        self._next_habit_id = 1
        self._next_entry_id = 1

    def is_logged_in(self) -> bool:
        return self._current is not None

    def current_account(self) -> Optional[Account]:
        return self._current

    @property
    def next_habit_id(self) -> int:
        return self._next_habit_id

    @property
    def next_entry_id(self) -> int:
        return self._next_entry_id

    # =========================================================================
    # HABITS
    # =========================================================================

    def create_habit(
        self,
        name: str,
        description: str,
        is_boolean: bool,
        target_value: float = 0,
        unit: str = "",
    ) -> Habit:
        """
        Create a habit for the active account.

        Inputs are NOT validated here. Callers check the name is
        non-empty and, for quantitative habits, that target_value > 0
        (see HabitInputValidator).

        Raises:
            NoActiveSessionError: If nobody is logged in
            StorageError: If persisting fails (the habit is still added)
        """
        account = self._require_session("create a habit")

        if is_boolean:
            variant = BooleanVariant()
        else:
            variant = QuantitativeVariant(target_value=target_value, unit=unit)

        habit = Habit(
            id=self._next_habit_id,
            name=name,
            description=description,
            created_date=self._now(),
            variant=variant,
        )
        self._next_habit_id += 1

        account.habits.append(habit)
        self._persist("create_habit")

        self._logger.info(
            "habit_created",
            account_id=account.id,
            habit_id=habit.id,
            kind=habit.kind.value,
        )
        return habit

    def create_habit_from_template(self, template: PredefinedHabit) -> Habit:
        """Create a habit from a predefined template."""
        return self.create_habit(
            template.name,
            template.description,
            template.is_boolean,
            target_value=template.target_value,
            unit=template.unit,
        )

    def add_predefined_habits(self, templates: Iterable[PredefinedHabit]) -> list[Habit]:
        """Create one habit per template, in order."""
        return [self.create_habit_from_template(template) for template in templates]

    def delete_habit(self, habit_id: int) -> bool:
        """
        Delete a habit and its whole history.

        Returns:
            True if deleted, False if the active account has no such habit

        Raises:
            NoActiveSessionError: If nobody is logged in
        """
        account = self._require_session("delete a habit")

        habit = account.find_habit(habit_id)
        if habit is None:
            return False

        account.habits.remove(habit)
        self._persist("delete_habit")

        self._logger.info(
            "habit_deleted",
            account_id=account.id,
            habit_id=habit_id,
            entry_count=len(habit.history),
        )
        return True

    # =========================================================================
    # PROGRESS
    # =========================================================================

    def log_progress(
        self,
        habit_id: int,
        day: Union[date, datetime],
        value: float,
        note: str = "",
    ) -> Optional[HabitEntry]:
        """
        Record a value for a habit on a calendar day.

        Upserts: if the habit already has an entry for that day it is
        overwritten (value, note, is_target_met); otherwise a new entry
        with the next entry ID is appended.

        Returns:
            The written entry, or None if the habit does not exist

        Raises:
            NoActiveSessionError: If nobody is logged in
        """
        account = self._require_session("log progress")

        habit = account.find_habit(habit_id)
        if habit is None:
            return None

        day = _as_date(day)
        entry = habit.entry_on(day)

        if entry is not None:
            entry.value = value
            entry.note = note
            entry.is_target_met = habit.is_completed(value)
            created = False
        else:
            entry = HabitEntry(
                id=self._next_entry_id,
                habit_id=habit.id,
                date=day,
                value=value,
                note=note,
                is_target_met=habit.is_completed(value),
            )
            self._next_entry_id += 1
            habit.history.append(entry)
            created = True

        self._persist("log_progress")

        self._logger.info(
            "progress_logged",
            account_id=account.id,
            habit_id=habit.id,
            entry_id=entry.id,
            date=day.isoformat(),
            is_target_met=entry.is_target_met,
            created=created,
        )
        return entry

    # =========================================================================
    # QUERIES
    # =========================================================================

    def all_habits(self) -> list[Habit]:
        """Habits of the active account (empty when logged out)."""
        if self._current is None:
            return []
        return list(self._current.habits)

    def habit_by_id(self, habit_id: int) -> Optional[Habit]:
        if self._current is None:
            return None
        return self._current.find_habit(habit_id)

    def habits_with_entry_on(self, day: Union[date, datetime]) -> list[Habit]:
        """Habits of the active account with an entry on the given day."""
        if self._current is None:
            return []
        day = _as_date(day)
        return [habit for habit in self._current.habits if habit.has_entry_on(day)]

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _find_account(self, username: str) -> Optional[Account]:
        for account in self._accounts:
            if account.matches_username(username):
                return account
        return None

    def _require_session(self, operation: str) -> Account:
        if self._current is None:
            raise NoActiveSessionError(operation)
        return self._current

    def _persist(self, operation: str) -> None:
        try:
            self._storage.save(self._accounts)
        except StorageError as e:
            self._logger.error(
                "persist_failed",
                operation=operation,
                error=str(e),
            )
            raise

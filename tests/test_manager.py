"""
Tests for HabitManager

Uses the in-memory store so persistence can be inspected without files,
and a fixed clock so creation timestamps are predictable.
"""

import pytest
from datetime import date, datetime

from habit_tracker.config import get_predefined_habits
from habit_tracker.manager import HabitManager, HabitManagerError, NoActiveSessionError
from habit_tracker.models import BooleanVariant, QuantitativeVariant
from habit_tracker.services.storage import (
    AccountStorageInterface,
    InMemoryAccountStorage,
    StorageError,
)


FIXED_NOW = datetime(2024, 5, 15, 9, 30)


class FailingStorage(InMemoryAccountStorage):
    """In-memory store whose saves can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail = False

    def save(self, accounts):
        if self.fail:
            raise StorageError("disk full")
        super().save(accounts)


class BrokenLoadStorage(AccountStorageInterface):
    def load(self):
        raise StorageError("unreadable")

    def save(self, accounts):
        pass


@pytest.fixture
def storage():
    return InMemoryAccountStorage()


@pytest.fixture
def manager(storage):
    return HabitManager(storage, now=lambda: FIXED_NOW)


@pytest.fixture
def logged_in(manager):
    assert manager.register("alice", "secret")
    assert manager.login("alice", "secret")
    return manager


class TestRegistration:
    """Tests for register."""

    def test_register_persists_account(self, manager, storage):
        """Test a successful registration is saved."""
        assert manager.register("alice", "secret") is True
        assert storage.save_count == 1
        assert storage.snapshot[0]["username"] == "alice"
        assert storage.snapshot[0]["id"] == 1

    def test_ids_follow_max(self, manager, storage):
        """Test account IDs are max(existing) + 1."""
        manager.register("alice", "a")
        manager.register("bob", "b")
        assert [a["id"] for a in storage.snapshot] == [1, 2]

    def test_username_taken_ignoring_case(self, manager, storage):
        """Test a username differing only by case is rejected."""
        assert manager.register("Alice", "secret")
        assert manager.register("aLiCe", "other") is False
        assert len(storage.snapshot) == 1
        assert storage.save_count == 1

    @pytest.mark.parametrize("username,password", [
        ("", "pw"),
        ("   ", "pw"),
        ("alice", ""),
        ("alice", "  \t"),
    ])
    def test_blank_fields_rejected(self, manager, storage, username, password):
        """Test blank usernames or passwords are rejected without saving."""
        assert manager.register(username, password) is False
        assert storage.save_count == 0

    def test_register_does_not_log_in(self, manager):
        """Test registering leaves the session untouched."""
        manager.register("alice", "secret")
        assert manager.is_logged_in() is False


class TestSession:
    """Tests for login, logout and session state."""

    def test_login_username_any_case(self, manager):
        """Test usernames match regardless of case."""
        manager.register("Alice", "secret")
        assert manager.login("ALICE", "secret") is True
        assert manager.current_account().username == "Alice"

    def test_login_password_exact(self, manager):
        """Test passwords are compared verbatim."""
        manager.register("alice", "Secret")
        assert manager.login("alice", "secret") is False
        assert manager.login("alice", "Secret ") is False
        assert manager.is_logged_in() is False

    def test_login_unknown_user(self, manager):
        """Test an unknown username fails."""
        assert manager.login("ghost", "pw") is False

    def test_login_blank_fields(self, manager):
        """Test blank credentials fail."""
        manager.register("alice", "secret")
        assert manager.login("", "secret") is False
        assert manager.login("alice", " ") is False

    def test_logout_is_idempotent(self, logged_in):
        """Test logout clears the session and can be repeated."""
        logged_in.logout()
        logged_in.logout()
        assert logged_in.is_logged_in() is False
        assert logged_in.current_account() is None
        assert logged_in.next_habit_id == 1
        assert logged_in.next_entry_id == 1

    def test_counters_rederived_on_login(self, storage):
        """Test ID counters continue from existing data after a restart."""
        first = HabitManager(storage, now=lambda: FIXED_NOW)
        first.register("alice", "secret")
        first.login("alice", "secret")
        a = first.create_habit("A", "", True)
        b = first.create_habit("B", "", True)
        first.log_progress(a.id, date(2024, 5, 1), 1)
        first.log_progress(b.id, date(2024, 5, 1), 1)

        second = HabitManager(storage, now=lambda: FIXED_NOW)
        second.login("alice", "secret")
        assert second.next_habit_id == 3
        assert second.next_entry_id == 3

        habit = second.create_habit("C", "", True)
        entry = second.log_progress(habit.id, date(2024, 5, 1), 1)
        assert habit.id == 3
        assert entry.id == 3

    def test_counters_are_per_account(self, manager):
        """Test switching accounts re-derives counters from the new account."""
        manager.register("alice", "a")
        manager.register("bob", "b")
        manager.login("alice", "a")
        manager.create_habit("A1", "", True)
        manager.create_habit("A2", "", True)
        manager.logout()

        manager.login("bob", "b")
        assert manager.next_habit_id == 1
        assert manager.create_habit("B1", "", True).id == 1

    def test_load_failure_propagates(self):
        """Test the manager does not start on an unreadable store."""
        with pytest.raises(StorageError):
            HabitManager(BrokenLoadStorage())


class TestHabits:
    """Tests for create_habit, delete_habit and lookups."""

    def test_create_boolean_habit(self, logged_in):
        """Test a boolean habit is created with manager-assigned fields."""
        habit = logged_in.create_habit("Meditate", "Ten minutes", True)

        assert habit.id == 1
        assert habit.created_date == FIXED_NOW
        assert isinstance(habit.variant, BooleanVariant)
        assert habit.history == []

    def test_create_quantitative_habit(self, logged_in):
        """Test a quantitative habit keeps its target and unit."""
        habit = logged_in.create_habit("Steps", "", False, target_value=10000, unit="steps")

        assert isinstance(habit.variant, QuantitativeVariant)
        assert habit.target_value == 10000
        assert habit.unit == "steps"

    @pytest.mark.parametrize("is_boolean,target,unit", [
        (True, 0, ""),
        (False, 8, "glasses"),
        (False, 0.5, ""),
    ])
    def test_created_habit_is_retrievable(self, logged_in, is_boolean, target, unit):
        """Test habit_by_id returns the created habit and all_habits lists it once."""
        habit = logged_in.create_habit("Water", "", is_boolean, target, unit)

        assert logged_in.habit_by_id(habit.id) == habit
        assert [h.id for h in logged_in.all_habits()].count(habit.id) == 1

    def test_create_persists(self, logged_in, storage):
        """Test creating a habit saves the roster with the type tag."""
        logged_in.create_habit("Steps", "", False, target_value=10000, unit="steps")
        record = storage.snapshot[0]["habits"][0]
        assert record["$type"] == "quantitative"
        assert record["target_value"] == 10000

    def test_create_keeps_description_verbatim(self, logged_in, storage):
        """Test padded descriptions are stored without trimming."""
        logged_in.create_habit("Read", "  indented\n", True)
        assert storage.snapshot[0]["habits"][0]["description"] == "  indented\n"
        assert storage.load()[0].habits[0].description == "  indented\n"

    def test_create_requires_session(self, manager):
        """Test creating a habit while logged out raises NoActiveSessionError."""
        with pytest.raises(NoActiveSessionError):
            manager.create_habit("X", "", True)

    def test_ids_increase(self, logged_in):
        """Test habit IDs are allocated in sequence."""
        ids = [logged_in.create_habit(f"H{i}", "", True).id for i in range(3)]
        assert ids == [1, 2, 3]

    def test_delete_habit(self, logged_in, storage):
        """Test deleting removes the habit and its entries."""
        habit = logged_in.create_habit("Read", "", True)
        logged_in.log_progress(habit.id, date(2024, 5, 1), 1)

        assert logged_in.delete_habit(habit.id) is True
        assert logged_in.habit_by_id(habit.id) is None
        assert storage.snapshot[0]["habits"] == []

    def test_delete_unknown_habit(self, logged_in, storage):
        """Test deleting a missing habit returns False without saving."""
        saves = storage.save_count
        assert logged_in.delete_habit(42) is False
        assert storage.save_count == saves

    def test_delete_requires_session(self, manager):
        """Test deleting while logged out raises NoActiveSessionError."""
        with pytest.raises(NoActiveSessionError):
            manager.delete_habit(1)

    def test_deleted_id_not_reused_in_session(self, logged_in):
        """Test a deleted habit's ID is not handed out again in the same session."""
        first = logged_in.create_habit("A", "", True)
        logged_in.delete_habit(first.id)
        assert logged_in.create_habit("B", "", True).id == 2

    def test_queries_when_logged_out(self, manager):
        """Test read queries return empty results without a session."""
        assert manager.all_habits() == []
        assert manager.habit_by_id(1) is None
        assert manager.habits_with_entry_on(date(2024, 5, 1)) == []

    def test_all_habits_returns_copy(self, logged_in):
        """Test mutating the returned list does not touch the account."""
        logged_in.create_habit("A", "", True)
        logged_in.all_habits().clear()
        assert len(logged_in.all_habits()) == 1

    def test_habits_are_scoped_to_account(self, manager):
        """Test one account cannot see another's habits."""
        manager.register("alice", "a")
        manager.register("bob", "b")
        manager.login("alice", "a")
        habit = manager.create_habit("Private", "", True)
        manager.logout()

        manager.login("bob", "b")
        assert manager.habit_by_id(habit.id) is None
        assert manager.delete_habit(habit.id) is False


class TestLogProgress:
    """Tests for log_progress."""

    def test_new_entry(self, logged_in):
        """Test the first log for a day creates an entry."""
        habit = logged_in.create_habit("Read", "", True)
        entry = logged_in.log_progress(habit.id, date(2024, 5, 1), 1.0, "good")

        assert entry.id == 1
        assert entry.habit_id == habit.id
        assert entry.date == date(2024, 5, 1)
        assert entry.note == "good"
        assert entry.is_target_met is True
        assert habit.history == [entry]

    def test_same_day_upserts(self, logged_in):
        """Test logging twice on a day leaves one entry with the second value."""
        habit = logged_in.create_habit("Water", "", False, target_value=8, unit="glasses")
        first = logged_in.log_progress(habit.id, date(2024, 5, 1), 9, "morning")
        second = logged_in.log_progress(habit.id, date(2024, 5, 1), 3, "corrected")

        assert second is first
        assert len(habit.history) == 1
        assert second.value == 3
        assert second.note == "corrected"
        assert second.is_target_met is False

    def test_datetime_is_reduced_to_day(self, logged_in):
        """Test the time of day is ignored when matching entries."""
        habit = logged_in.create_habit("Read", "", True)
        logged_in.log_progress(habit.id, datetime(2024, 5, 1, 7, 0), 0)
        entry = logged_in.log_progress(habit.id, datetime(2024, 5, 1, 22, 15), 1)

        assert len(habit.history) == 1
        assert entry.date == date(2024, 5, 1)
        assert entry.is_target_met is True

    def test_completion_flag_uses_variant(self, logged_in):
        """Test is_target_met follows the habit's completion rule."""
        boolean = logged_in.create_habit("Yes/No", "", True)
        quantitative = logged_in.create_habit("Pages", "", False, target_value=10)

        assert logged_in.log_progress(boolean.id, date(2024, 5, 1), 0.99).is_target_met is False
        assert logged_in.log_progress(boolean.id, date(2024, 5, 2), 1.0).is_target_met is True
        assert logged_in.log_progress(quantitative.id, date(2024, 5, 1), 9.999).is_target_met is False
        assert logged_in.log_progress(quantitative.id, date(2024, 5, 2), 10.0).is_target_met is True

    def test_entry_ids_unique_across_habits(self, logged_in):
        """Test entry IDs are shared across all habits of the account."""
        a = logged_in.create_habit("A", "", True)
        b = logged_in.create_habit("B", "", True)
        ids = [
            logged_in.log_progress(a.id, date(2024, 5, 1), 1).id,
            logged_in.log_progress(b.id, date(2024, 5, 1), 1).id,
            logged_in.log_progress(a.id, date(2024, 5, 2), 1).id,
        ]
        assert ids == [1, 2, 3]

    def test_upsert_does_not_consume_id(self, logged_in):
        """Test overwriting an entry does not advance the entry counter."""
        habit = logged_in.create_habit("A", "", True)
        logged_in.log_progress(habit.id, date(2024, 5, 1), 1)
        logged_in.log_progress(habit.id, date(2024, 5, 1), 0)
        assert logged_in.log_progress(habit.id, date(2024, 5, 2), 1).id == 2

    def test_unknown_habit(self, logged_in, storage):
        """Test logging against a missing habit returns None without saving."""
        saves = storage.save_count
        assert logged_in.log_progress(99, date(2024, 5, 1), 1) is None
        assert storage.save_count == saves

    def test_requires_session(self, manager):
        """Test logging while logged out raises NoActiveSessionError."""
        with pytest.raises(NoActiveSessionError) as exc_info:
            manager.log_progress(1, date(2024, 5, 1), 1)
        assert isinstance(exc_info.value, HabitManagerError)

    def test_persists_both_paths(self, logged_in, storage):
        """Test both insert and update save the roster."""
        habit = logged_in.create_habit("A", "", True)
        saves = storage.save_count
        logged_in.log_progress(habit.id, date(2024, 5, 1), 1)
        logged_in.log_progress(habit.id, date(2024, 5, 1), 0, "oops")

        assert storage.save_count == saves + 2
        entry = storage.snapshot[0]["habits"][0]["history"][0]
        assert entry["value"] == 0
        assert entry["note"] == "oops"
        assert entry["is_target_met"] is False

    def test_habits_with_entry_on(self, logged_in):
        """Test filtering habits by a day with an entry."""
        a = logged_in.create_habit("A", "", True)
        b = logged_in.create_habit("B", "", True)
        logged_in.log_progress(a.id, date(2024, 5, 1), 0)
        logged_in.log_progress(b.id, date(2024, 5, 2), 1)

        assert logged_in.habits_with_entry_on(date(2024, 5, 1)) == [a]
        assert logged_in.habits_with_entry_on(datetime(2024, 5, 2, 18, 0)) == [b]
        assert logged_in.habits_with_entry_on(date(2024, 5, 3)) == []


class TestPersistenceFailures:
    """Tests for save failures."""

    def test_failed_save_propagates_after_mutation(self):
        """Test a failed save raises but the in-memory change remains."""
        storage = FailingStorage()
        manager = HabitManager(storage, now=lambda: FIXED_NOW)
        manager.register("alice", "secret")
        manager.login("alice", "secret")

        storage.fail = True
        with pytest.raises(StorageError):
            manager.create_habit("Read", "", True)

        assert [h.name for h in manager.all_habits()] == ["Read"]
        assert storage.snapshot[0]["habits"] == []

    def test_failed_register_propagates(self):
        """Test registration surfaces save failures."""
        storage = FailingStorage()
        storage.fail = True
        manager = HabitManager(storage)
        with pytest.raises(StorageError):
            manager.register("alice", "secret")


class TestTemplates:
    """Tests for creating habits from predefined templates."""

    def test_catalogue_contents(self):
        """Test the catalogue has six templates of each kind."""
        templates = get_predefined_habits()
        assert sum(1 for t in templates if t.is_boolean) == 6
        assert sum(1 for t in templates if not t.is_boolean) == 6
        assert all(t.target_value > 0 for t in templates if not t.is_boolean)

    def test_create_from_template(self, logged_in):
        """Test a quantitative template becomes a quantitative habit."""
        template = next(t for t in get_predefined_habits() if not t.is_boolean)
        habit = logged_in.create_habit_from_template(template)

        assert habit.name == template.name
        assert habit.is_quantitative
        assert habit.target_value == template.target_value
        assert habit.unit == template.unit

    def test_add_predefined_habits(self, logged_in):
        """Test adding the whole catalogue creates one habit per template."""
        templates = get_predefined_habits()
        habits = logged_in.add_predefined_habits(templates)

        assert [h.name for h in habits] == [t.name for t in templates]
        assert [h.id for h in habits] == list(range(1, len(templates) + 1))

    def test_templates_require_session(self, manager):
        """Test template creation also needs a logged-in account."""
        with pytest.raises(NoActiveSessionError):
            manager.add_predefined_habits(get_predefined_habits())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

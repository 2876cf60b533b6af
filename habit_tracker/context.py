"""
Application context for dependency injection.

DESIGN DECISION: There is no module-level manager or session singleton.
The process builds one AppContext at startup and passes it by reference
to whatever needs the manager or the settings.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from habit_tracker.config.predefined import get_predefined_habits
from habit_tracker.config.settings import Settings, get_settings
from habit_tracker.log import configure_logging, get_logger
from habit_tracker.manager import HabitManager
from habit_tracker.models.habit import Habit
from habit_tracker.services.storage import (
    AccountStorageInterface,
    JsonFileAccountStorage,
)


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    settings: Settings
    storage: AccountStorageInterface
    manager: HabitManager

    def seed_predefined_habits(self) -> list[Habit]:
        """
        Give the logged-in account the template catalogue if it has no habits.

        Does nothing unless seeding is enabled in settings, someone is
        logged in, and their habit list is empty.
        """
        if not self.settings.app.seed_predefined_habits:
            return []
        if not self.manager.is_logged_in() or self.manager.all_habits():
            return []

        habits = self.manager.add_predefined_habits(get_predefined_habits())
        get_logger(__name__).info("predefined_habits_seeded", count=len(habits))
        return habits


def create_app_context(
    settings: Optional[Settings] = None,
    storage: Optional[AccountStorageInterface] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> AppContext:
    """
    Create and initialize the application context.

    Args:
        settings: Settings to use (defaults to the cached global settings)
        storage: Storage backend (defaults to the JSON file from settings)
        now: Clock for the manager (defaults to datetime.now)

    Raises:
        StorageError: If the existing data file cannot be loaded
    """
    settings = settings or get_settings()

    configure_logging(settings.logging)

    if storage is None:
        storage = JsonFileAccountStorage(settings=settings.storage)

    manager = HabitManager(storage, now=now)

    return AppContext(
        settings=settings,
        storage=storage,
        manager=manager,
    )

"""
Account Model

An account (a "user" in habit-tracking terms) owns its habits outright:
removing a habit from the list removes its whole history with it.

NOTE: Passwords are stored and compared as plain text. Hashing is
deliberately out of scope for this project.
"""

from typing import Optional

from pydantic import BaseModel, Field

from habit_tracker.models.habit import Habit


class Account(BaseModel):
    """A registered account and its habits."""

    id: int = Field(
        ...,
        description="Account ID, allocated as max(existing) + 1"
    )
    username: str = Field(
        ...,
        description="Login name, unique ignoring case"
    )
    password: str = Field(
        ...,
        repr=False,
        description="Plain-text password, compared verbatim"
    )
    habits: list[Habit] = Field(
        default_factory=list,
        description="Habits owned by this account"
    )

    def matches_username(self, username: str) -> bool:
        """Case-insensitive username comparison."""
        return self.username.casefold() == username.casefold()

    def find_habit(self, habit_id: int) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    @property
    def max_habit_id(self) -> int:
        """Highest habit ID in use, 0 if there are no habits."""
        return max((habit.id for habit in self.habits), default=0)

    @property
    def max_entry_id(self) -> int:
        """Highest entry ID across all habits, 0 if there are no entries."""
        return max(
            (entry.id for habit in self.habits for entry in habit.history),
            default=0,
        )

"""Input validation package."""

from habit_tracker.validation.validator import HabitInputValidator

__all__ = ["HabitInputValidator"]

"""
Data Models Package

This package contains all Pydantic models used by the habit tracker.
Everything the manager stores and the stats engine reads is defined here.
"""

from habit_tracker.models.habit import (
    BOOLEAN_COMPLETION_THRESHOLD,
    BooleanVariant,
    Habit,
    HabitEntry,
    HabitKind,
    HabitVariant,
    QuantitativeVariant,
    is_completed,
)
from habit_tracker.models.account import Account
from habit_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Habit models
    "BOOLEAN_COMPLETION_THRESHOLD",
    "BooleanVariant",
    "Habit",
    "HabitEntry",
    "HabitKind",
    "HabitVariant",
    "QuantitativeVariant",
    "is_completed",
    # Account models
    "Account",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]

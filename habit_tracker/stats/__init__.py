"""
Statistics package.

Read-only functions that derive streaks and completion rates
from a habit's entry history.
"""

from habit_tracker.stats.engine import (
    InvalidDateRangeError,
    InvalidWindowError,
    StatsValidationError,
    WrongHabitKindError,
    average_value,
    completion_percentage,
    completion_percentage_last_n_days,
    completion_percentage_this_month,
    completion_percentage_this_week,
    current_streak,
    longest_streak,
    total_completed_days,
    week_start,
)
from habit_tracker.stats.summary import HabitStatsSummary, summarize_habit

__all__ = [
    # Errors
    "InvalidDateRangeError",
    "InvalidWindowError",
    "StatsValidationError",
    "WrongHabitKindError",
    # Statistics
    "average_value",
    "completion_percentage",
    "completion_percentage_last_n_days",
    "completion_percentage_this_month",
    "completion_percentage_this_week",
    "current_streak",
    "longest_streak",
    "total_completed_days",
    "week_start",
    # Summary
    "HabitStatsSummary",
    "summarize_habit",
]

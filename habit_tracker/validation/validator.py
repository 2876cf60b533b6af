"""
Input Validation

DESIGN DECISION: The manager trusts its inputs. Checking that a habit
name is present, that a target is positive, or that an entry is not
dated in the future happens here, BEFORE the manager is called.

Validation NEVER silently fixes input. It reports issues and lets the
caller decide what to show the user.
"""

from datetime import date, datetime
from typing import Optional, Union

from habit_tracker.models.validation import ValidationIssue, ValidationResult


class HabitInputValidator:
    """Caller-side checks for habit and entry input."""

    def __init__(self, today: Optional[date] = None):
        """
        Args:
            today: Fixed "today" for future-date checks. Defaults to the
                   real current date at call time.
        """
        self._today = today

    @staticmethod
    def is_valid_habit_name(name: Optional[str]) -> bool:
        return name is not None and bool(name.strip())

    @staticmethod
    def is_positive(value: float) -> bool:
        return value > 0

    @staticmethod
    def is_non_negative(value: float) -> bool:
        return value >= 0

    def validate_habit_name(self, name: Optional[str]) -> ValidationResult:
        result = ValidationResult()
        if not self.is_valid_habit_name(name):
            result.issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Habit name cannot be empty.",
            ))
        return result

    def validate_boolean_habit(
        self,
        name: Optional[str],
        description: Optional[str] = None,
    ) -> ValidationResult:
        """Validate input for a yes/no habit. Only the name is required."""
        return self.validate_habit_name(name)

    def validate_quantitative_habit(
        self,
        name: Optional[str],
        target_value: float,
        unit: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ValidationResult:
        """Validate input for a quantitative habit: name and a positive target."""
        result = self.validate_habit_name(name)
        if not self.is_positive(target_value):
            result.issues.append(ValidationIssue(
                field="target_value",
                issue_type="not_positive",
                message="Target value must be a positive number.",
                suggested_fix="Enter a number greater than zero",
            ))
        return result

    def validate_entry_value(self, value: float) -> ValidationResult:
        result = ValidationResult()
        if not self.is_non_negative(value):
            result.issues.append(ValidationIssue(
                field="value",
                issue_type="negative",
                message="Entry value cannot be negative.",
            ))
        return result

    def validate_entry_date(self, day: Union[date, datetime]) -> ValidationResult:
        """Entries cannot be dated in the future."""
        if isinstance(day, datetime):
            day = day.date()
        today = self._today or date.today()

        result = ValidationResult()
        if day > today:
            result.issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message="Entry date cannot be in the future.",
            ))
        return result

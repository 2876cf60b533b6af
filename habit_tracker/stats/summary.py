"""
Per-habit statistics summary.

Bundles the figures a habit detail view shows into one model so the
presentation layer makes a single call.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field

from habit_tracker.models.habit import Habit, HabitKind
from habit_tracker.stats.engine import (
    DateLike,
    average_value,
    completion_percentage_last_n_days,
    completion_percentage_this_month,
    completion_percentage_this_week,
    current_streak,
    longest_streak,
    resolve_today,
    total_completed_days,
)


ROLLING_WINDOW_DAYS = 30


class HabitStatsSummary(BaseModel):
    """Snapshot of a habit's statistics as of `as_of`."""

    habit_id: int
    habit_name: str
    kind: HabitKind
    as_of: date
    created_date: datetime

    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    total_completed_days: int = Field(ge=0)
    entry_count: int = Field(ge=0)

    week_percentage: float = Field(ge=0.0)
    month_percentage: float = Field(ge=0.0)
    last_30_days_percentage: float = Field(ge=0.0)

    # Quantitative habits only
    target_value: Optional[float] = None
    unit: Optional[str] = None
    average_value_last_30_days: Optional[float] = None


def summarize_habit(habit: Habit, *, today: Optional[DateLike] = None) -> HabitStatsSummary:
    """Compute every summary figure for one habit."""
    as_of = resolve_today(today)

    summary = HabitStatsSummary(
        habit_id=habit.id,
        habit_name=habit.name,
        kind=habit.kind,
        as_of=as_of,
        created_date=habit.created_date,
        current_streak=current_streak(habit, today=as_of),
        longest_streak=longest_streak(habit),
        total_completed_days=total_completed_days(habit),
        entry_count=len(habit.history),
        week_percentage=completion_percentage_this_week(habit, today=as_of),
        month_percentage=completion_percentage_this_month(habit, today=as_of),
        last_30_days_percentage=completion_percentage_last_n_days(
            habit, ROLLING_WINDOW_DAYS, today=as_of
        ),
    )

    if habit.is_quantitative:
        summary.target_value = habit.target_value
        summary.unit = habit.unit
        summary.average_value_last_30_days = average_value(
            habit,
            as_of - timedelta(days=ROLLING_WINDOW_DAYS),
            as_of,
        )

    return summary

"""
Habit Statistics Engine

DESIGN DECISION: Statistics are PURE functions of a habit's history.
No caching, no hidden state: every call reads `habit.history` and
returns a number. This keeps them safe to call as often as the
presentation layer likes.

Only entries with is_target_met count as "done" days. Days without a
qualifying entry are gaps; there is no such thing as a skipped day.

Functions that depend on the current day take a keyword-only `today`
so callers (and tests) can pin the calendar.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from habit_tracker.models.habit import Habit, HabitEntry


DateLike = Union[date, datetime]


class StatsValidationError(ValueError):
    """Base class for invalid statistics requests."""
    pass


class InvalidDateRangeError(StatsValidationError):
    """Start date is after end date."""

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )


class InvalidWindowError(StatsValidationError):
    """A rolling window must cover at least one day."""
    pass


class WrongHabitKindError(StatsValidationError):
    """The statistic is not defined for this habit variant."""
    pass


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_today(today: Optional[DateLike]) -> date:
    return _as_date(today) if today is not None else date.today()


def _check_range(start_date: DateLike, end_date: DateLike) -> tuple[date, date]:
    start, end = _as_date(start_date), _as_date(end_date)
    if start > end:
        raise InvalidDateRangeError(start, end)
    return start, end


def _entries_between(habit: Habit, start: date, end: date) -> list[HabitEntry]:
    return [entry for entry in habit.history if start <= entry.date <= end]


def _completed_dates(habit: Habit) -> list[date]:
    return [entry.date for entry in habit.history if entry.is_target_met]


# =============================================================================
# STREAKS
# =============================================================================

def current_streak(habit: Habit, *, today: Optional[DateLike] = None) -> int:
    """
    Count consecutive completed days ending today or yesterday.

    If the most recent completed day is older than yesterday the streak
    is already broken and the result is 0.
    """
    days = sorted(_completed_dates(habit), reverse=True)
    if not days:
        return 0

    if (resolve_today(today) - days[0]).days > 1:
        return 0

    streak = 1
    last_day = days[0]
    for day in days[1:]:
        if (last_day - day).days != 1:
            break
        streak += 1
        last_day = day

    return streak


def longest_streak(habit: Habit) -> int:
    """Longest run of consecutive completed days anywhere in the history."""
    days = sorted(_completed_dates(habit))
    if not days:
        return 0

    longest = 1
    running = 1
    last_day = days[0]

    for day in days[1:]:
        gap = (day - last_day).days
        if gap == 1:
            running += 1
        elif gap > 1:
            longest = max(longest, running)
            running = 1
        # gap == 0: duplicate day, neither extends nor breaks
        last_day = day

    return max(longest, running)


# =============================================================================
# COMPLETION RATES
# =============================================================================

def completion_percentage(
    habit: Habit,
    start_date: DateLike,
    end_date: DateLike,
) -> float:
    """
    Percentage (0-100) of days in [start_date, end_date] that were completed.

    Both ends are inclusive.

    Raises:
        InvalidDateRangeError: If start_date is after end_date
    """
    start, end = _check_range(start_date, end_date)

    total_days = (end - start).days + 1
    completed_days = sum(
        1 for entry in _entries_between(habit, start, end) if entry.is_target_met
    )

    return completed_days / total_days * 100.0


def completion_percentage_last_n_days(
    habit: Habit,
    days: int,
    *,
    today: Optional[DateLike] = None,
) -> float:
    """Completion percentage over the last `days` days, today included."""
    if days <= 0:
        raise InvalidWindowError(f"Window must be at least one day, got {days}")

    end = resolve_today(today)
    start = end - timedelta(days=days - 1)
    return completion_percentage(habit, start, end)


def completion_percentage_this_month(
    habit: Habit,
    *,
    today: Optional[DateLike] = None,
) -> float:
    """Completion percentage from the 1st of the current month to today."""
    end = resolve_today(today)
    return completion_percentage(habit, end.replace(day=1), end)


def week_start(day: date) -> date:
    """Sunday on or before `day`. Weeks run Sunday to Saturday."""
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def completion_percentage_this_week(
    habit: Habit,
    *,
    today: Optional[DateLike] = None,
) -> float:
    """Completion percentage from the start of the week (Sunday) to today."""
    end = resolve_today(today)
    return completion_percentage(habit, week_start(end), end)


# =============================================================================
# VALUES AND TOTALS
# =============================================================================

def average_value(
    habit: Habit,
    start_date: DateLike,
    end_date: DateLike,
) -> Optional[float]:
    """
    Mean logged value in [start_date, end_date] for a quantitative habit.

    Every entry in range counts, whether or not it met the target.

    Returns:
        The mean, or None if nothing was logged in range

    Raises:
        WrongHabitKindError: If the habit is not quantitative
        InvalidDateRangeError: If start_date is after end_date
    """
    if not habit.is_quantitative:
        raise WrongHabitKindError(
            f"Average value needs a quantitative habit, got {habit.kind.value}"
        )

    start, end = _check_range(start_date, end_date)
    entries = _entries_between(habit, start, end)
    if not entries:
        return None

    return sum(entry.value for entry in entries) / len(entries)


def total_completed_days(habit: Habit) -> int:
    """Number of entries that met the target, over the whole history."""
    return sum(1 for entry in habit.history if entry.is_target_met)

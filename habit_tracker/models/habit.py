"""
Core Habit Models

A habit is a recurring activity tracked one calendar day at a time.
Every habit shares the same identity and history fields and carries
a tagged variant payload that decides what "completed" means:

- BOOLEAN: done / not done. A logged value of 1.0 or more counts.
- QUANTITATIVE: a numeric target (e.g. 8 glasses of water).
  A logged value at or above the target counts.

DESIGN DECISION: The variant is a discriminated union on `kind`, not a
class hierarchy. The completion rule is a plain function dispatched on
the tag, so adding a variant means touching exactly one place.
"""

import datetime as dt
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class HabitKind(str, Enum):
    """
    Supported habit variants.

    CRITICAL: The values are written to disk as the habit type
    discriminator. Changing them breaks every stored file.
    """
    BOOLEAN = "boolean"
    QUANTITATIVE = "quantitative"


# =============================================================================
# VARIANT PAYLOADS
# =============================================================================

class BooleanVariant(BaseModel):
    """Yes/No habit. Carries no extra data."""

    kind: Literal[HabitKind.BOOLEAN] = HabitKind.BOOLEAN


class QuantitativeVariant(BaseModel):
    """
    Habit measured against a numeric target.

    target_value is fixed at creation. Entries cache their completion
    flag at write time, so changing the target later would leave
    history inconsistent.
    """

    kind: Literal[HabitKind.QUANTITATIVE] = HabitKind.QUANTITATIVE
    target_value: float = Field(
        ...,
        description="Value that must be reached for the day to count"
    )
    unit: str = Field(
        default="",
        description="Free-text unit label (e.g. 'minutes', 'steps')"
    )


HabitVariant = Annotated[
    Union[BooleanVariant, QuantitativeVariant],
    Field(discriminator="kind"),
]


BOOLEAN_COMPLETION_THRESHOLD = 1.0


def is_completed(variant: HabitVariant, value: float) -> bool:
    """
    Completion rule for a logged value.

    Pure function of (variant, value). Called on every write to
    (re)compute HabitEntry.is_target_met.
    """
    if variant.kind == HabitKind.BOOLEAN:
        return value >= BOOLEAN_COMPLETION_THRESHOLD
    elif variant.kind == HabitKind.QUANTITATIVE:
        return value >= variant.target_value
    raise ValueError(f"Unknown habit kind: {variant.kind!r}")


# =============================================================================
# ENTRY AND HABIT
# =============================================================================

class HabitEntry(BaseModel):
    """
    One day's recorded value for a habit.

    is_target_met is derived from the owning habit's completion rule
    at the moment of writing. It is cached here for fast filtering.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        description="Entry ID, unique within the account across all habits"
    )
    habit_id: int = Field(
        ...,
        description="ID of the habit this entry belongs to"
    )
    date: dt.date = Field(
        ...,
        description="Calendar day of the entry (time of day is ignored)"
    )
    value: float = Field(
        default=0.0,
        description="Logged value"
    )
    note: str = Field(
        default="",
        description="Free-text note"
    )
    is_target_met: bool = Field(
        default=False,
        description="Cached result of the habit's completion rule"
    )


class Habit(BaseModel):
    """
    A tracked recurring activity.

    Habits are only created by HabitManager.create_habit. The manager
    also owns the one-entry-per-day rule for `history`; the model does
    not enforce it. Text fields are stored exactly as given.
    """

    id: int = Field(
        ...,
        description="Habit ID, unique within the owning account"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    description: str = Field(
        default="",
        description="Optional longer description"
    )
    created_date: dt.datetime = Field(
        ...,
        description="When the habit was created"
    )
    variant: HabitVariant
    history: list[HabitEntry] = Field(
        default_factory=list,
        description="Entries in insertion order"
    )

    @property
    def kind(self) -> HabitKind:
        return self.variant.kind

    @property
    def is_boolean(self) -> bool:
        return self.variant.kind == HabitKind.BOOLEAN

    @property
    def is_quantitative(self) -> bool:
        return self.variant.kind == HabitKind.QUANTITATIVE

    @property
    def target_value(self) -> Optional[float]:
        """Target for quantitative habits, None for boolean ones."""
        if self.is_quantitative:
            return self.variant.target_value
        return None

    @property
    def unit(self) -> str:
        if self.is_quantitative:
            return self.variant.unit
        return ""

    def is_completed(self, value: float) -> bool:
        """Apply this habit's completion rule to a value."""
        return is_completed(self.variant, value)

    def entry_on(self, day: dt.date) -> Optional[HabitEntry]:
        """Return the entry logged for a calendar day, if any."""
        for entry in self.history:
            if entry.date == day:
                return entry
        return None

    def has_entry_on(self, day: dt.date) -> bool:
        return self.entry_on(day) is not None

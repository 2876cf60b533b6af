"""
Predefined Habit Templates

A starter catalogue offered to accounts that have no habits yet.
Templates are plain data; turning one into a real habit goes through
HabitManager.create_habit_from_template so IDs and persistence stay
in the manager's hands.
"""

from pydantic import BaseModel, Field


class PredefinedHabit(BaseModel):
    """A habit template."""

    name: str = Field(..., min_length=1)
    description: str = ""
    is_boolean: bool = True
    target_value: float = Field(
        default=0.0,
        ge=0.0,
        description="Target for quantitative templates, ignored for boolean ones"
    )
    unit: str = ""


_BOOLEAN_TEMPLATES = [
    ("Drink water", "Remember to drink water regularly during the day"),
    ("Exercise", "Do a workout or some other physical activity"),
    ("Read a book", "Read at least a few pages of a book"),
    ("Meditate", "Take some time to relax and meditate"),
    ("Sleep well", "Make sure you get enough hours of sleep"),
    ("Go for a walk", "Get outside for a walk and some fresh air"),
]

_QUANTITATIVE_TEMPLATES = [
    ("Glasses of water", "Track how many glasses of water you drink per day", 8, "glasses"),
    ("Daily steps", "Count the steps you take during the day", 10000, "steps"),
    ("Reading time", "Track how many minutes a day you spend reading", 30, "minutes"),
    ("Exercise time", "Record how many minutes you exercised today", 30, "minutes"),
    ("Fruit and vegetable servings", "Track servings of fruit and vegetables per day", 5, "servings"),
    ("Time outdoors", "Record how many minutes a day you spend outside", 60, "minutes"),
]


def get_predefined_habits() -> list[PredefinedHabit]:
    """Return a fresh copy of the whole template catalogue."""
    templates = [
        PredefinedHabit(name=name, description=description, is_boolean=True)
        for name, description in _BOOLEAN_TEMPLATES
    ]
    templates.extend(
        PredefinedHabit(
            name=name,
            description=description,
            is_boolean=False,
            target_value=target,
            unit=unit,
        )
        for name, description, target, unit in _QUANTITATIVE_TEMPLATES
    )
    return templates

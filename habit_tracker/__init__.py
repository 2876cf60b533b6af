"""
Habit Tracker - Core Package

Tracks recurring personal habits, their daily entries, and the streak
and completion statistics derived from them.

DESIGN PRINCIPLES:
1. One owner for every write (HabitManager)
2. Statistics are pure functions of the history
3. Fail loudly on data we do not understand
4. Every change is persisted before the call returns
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Habit Tracker Team"

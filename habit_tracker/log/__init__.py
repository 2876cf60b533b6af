"""Structured logging package."""

from habit_tracker.log.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]

"""Ports - interfaces/protocols for external dependencies."""

from .task_source import TaskSource
from .calendar_source import CalendarSource
from .state_store import StateStore

__all__ = [
    "TaskSource",
    "CalendarSource",
    "StateStore",
]

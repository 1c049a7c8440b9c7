"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Priority, Domain, CognitiveLoad, TaskModulationResult, modulate_tasks
from .calendar import CalendarEvent, EventIntent, RecoveryBuffer, CalendarModulationResult, modulate_calendar
from .capacity import CapacityCatalog, CatalogError, StateConfig, DEFAULT_CATALOG, catalog_from_dict
from .state import StateMachine, StateChangeEvent
from .view import DailyView, assemble_view
from .recommend import Recommendation, recommend_state

__all__ = [
    # Tasks
    "Task",
    "Priority",
    "Domain",
    "CognitiveLoad",
    "TaskModulationResult",
    "modulate_tasks",
    # Calendar
    "CalendarEvent",
    "EventIntent",
    "RecoveryBuffer",
    "CalendarModulationResult",
    "modulate_calendar",
    # Capacity
    "CapacityCatalog",
    "CatalogError",
    "StateConfig",
    "DEFAULT_CATALOG",
    "catalog_from_dict",
    # State
    "StateMachine",
    "StateChangeEvent",
    # View
    "DailyView",
    "assemble_view",
    # Recommendation
    "Recommendation",
    "recommend_state",
]

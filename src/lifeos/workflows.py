"""Orchestration layer between the CLI and the functional core.

``LifeOS`` owns a state machine and the connected sources, fetches from all
sources concurrently and hands the flattened lists to the modulators.
"""

import asyncio
import dataclasses
import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path

from .adapters import CALENDAR_SOURCES, TASK_SOURCES, FileStateStore
from .config import Config
from .core.calendar import CalendarEvent
from .core.capacity import DEFAULT_CATALOG, CapacityCatalog, CatalogError, StateConfig, catalog_from_dict
from .core.state import StateMachine
from .core.tasks import Task
from .core.view import DailyView, assemble_view
from .ports import CalendarSource, StateStore, TaskSource

logger = logging.getLogger(__name__)


class LifeOS:
    """
    Combines the current capacity state with task and calendar sources.

    Nothing fetched or modulated is kept between calls.
    """

    def __init__(
        self,
        machine: StateMachine | None = None,
        task_sources: list[TaskSource] | None = None,
        calendars: list[CalendarSource] | None = None,
    ):
        self.machine = machine or StateMachine()
        self._task_sources: list[TaskSource] = list(task_sources or [])
        self._calendars: list[CalendarSource] = list(calendars or [])

    # State management

    @property
    def catalog(self) -> CapacityCatalog:
        return self.machine.catalog

    def capacity(self) -> str:
        return self.machine.current()

    def config(self) -> StateConfig:
        return self.machine.config()

    def set_capacity(self, state: str, reason: str | None = None) -> bool:
        return self.machine.set_state(state, reason)

    def reset_capacity(self) -> bool:
        return self.machine.reset()

    def degrade_gracefully(self, trigger: str) -> bool:
        return self.machine.degrade(trigger)

    # Sources

    def add_task_source(self, source: TaskSource) -> None:
        self._task_sources.append(source)

    def add_calendar(self, calendar: CalendarSource) -> None:
        self._calendars.append(calendar)

    def task_sources(self) -> list[TaskSource]:
        """Connected task sources."""
        return [s for s in self._task_sources if s.is_connected()]

    def calendars(self) -> list[CalendarSource]:
        """Connected calendars."""
        return [c for c in self._calendars if c.is_connected()]

    async def fetch_all_tasks(self) -> list[Task]:
        """Tasks from every connected source, flattened. Source order is not significant."""
        results = await asyncio.gather(*(s.fetch_tasks() for s in self.task_sources()))
        return [task for batch in results for task in batch]

    async def fetch_today_events(self, as_of: datetime | None = None) -> list[CalendarEvent]:
        """Today's events from every connected calendar, flattened."""
        results = await asyncio.gather(*(c.fetch_today_events(as_of) for c in self.calendars()))
        return [event for batch in results for event in batch]

    # Views

    async def daily_view(self, as_of: datetime | None = None) -> DailyView:
        """Modulate today's tasks and events under the current state."""
        as_of = as_of or datetime.now()
        tasks, events = await asyncio.gather(self.fetch_all_tasks(), self.fetch_today_events(as_of))
        return assemble_view(self.capacity(), self.config(), tasks, events, as_of=as_of)

    async def unmodulated_data(self, as_of: datetime | None = None) -> tuple[list[Task], list[CalendarEvent]]:
        """Raw tasks and today's events before any modulation."""
        tasks, events = await asyncio.gather(self.fetch_all_tasks(), self.fetch_today_events(as_of))
        return tasks, events

    async def unmodulated_load(self, as_of: datetime | None = None) -> dict[str, int]:
        tasks, events = await self.unmodulated_data(as_of)
        return {"task_count": len(tasks), "event_count": len(events)}


def load_catalog(config: Config) -> CapacityCatalog:
    """Catalog from the configured JSON file, or the built-in one."""
    catalog = DEFAULT_CATALOG

    if config.catalog_file:
        path = Path(config.catalog_file).expanduser()
        try:
            catalog = catalog_from_dict(json.loads(path.read_text()))
        except OSError as e:
            logger.warning(f"Cannot read catalog file {path}, using built-in catalog: {e}")
        except (json.JSONDecodeError, CatalogError) as e:
            logger.warning(f"Invalid catalog file {path}, using built-in catalog: {e}")

    if config.default_state and config.default_state != catalog.default:
        if config.default_state in catalog:
            catalog = CapacityCatalog(
                {name: catalog.config_for(name) for name in catalog},
                default=config.default_state,
                order=catalog.order,
            )
        else:
            logger.warning(f"Configured default state {config.default_state!r} is not in the catalog")

    return catalog


def get_state_store(config: Config, catalog: CapacityCatalog = DEFAULT_CATALOG) -> FileStateStore:
    """Resolve the last-state file from config."""
    return FileStateStore(config.state_path, catalog)


def build_lifeos(config: Config, store: StateStore | None = None) -> LifeOS:
    """Wire a LifeOS from config: catalog, saved state and enabled sources."""
    catalog = load_catalog(config)
    store = store or get_state_store(config, catalog)
    machine = StateMachine(catalog, initial_state=store.load())

    lifeos = LifeOS(machine)
    for source_id in config.enabled_sources:
        if source_id in TASK_SOURCES:
            lifeos.add_task_source(TASK_SOURCES[source_id]())
        elif source_id in CALENDAR_SOURCES:
            lifeos.add_calendar(CALENDAR_SOURCES[source_id]())
        else:
            logger.warning(f"Unknown source {source_id!r} in ENABLED_SOURCES")
    return lifeos


def view_to_dict(view: DailyView) -> dict:
    """JSON-ready rendering of a daily view."""

    def encode(value):
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, (set, frozenset)):
            return sorted(encode(v) for v in value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, dict):
            return {k: encode(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [encode(v) for v in value]
        return value

    return encode(dataclasses.asdict(view))

"""Adapters - I/O implementations of ports."""

from .mock_tasks import MockTaskSource, asana_source, obsidian_source
from .mock_calendar import MockCalendarSource, GoogleCalendarSource
from .file_state import FileStateStore

TASK_SOURCES = {
    "asana": asana_source,
    "obsidian": obsidian_source,
}

CALENDAR_SOURCES = {
    "google-calendar": GoogleCalendarSource,
}

__all__ = [
    "MockTaskSource",
    "MockCalendarSource",
    "GoogleCalendarSource",
    "FileStateStore",
    "asana_source",
    "obsidian_source",
    "TASK_SOURCES",
    "CALENDAR_SOURCES",
]

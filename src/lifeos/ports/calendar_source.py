"""Calendar source interface."""

from datetime import datetime
from typing import Protocol

from lifeos.core.calendar import CalendarEvent
from lifeos.core.tasks import Domain


class CalendarSource(Protocol):
    """Interface for fetching events from any calendar backend."""

    id: str
    name: str
    source: Domain

    def is_connected(self) -> bool:
        """Whether the calendar is connected and authenticated."""
        ...

    async def fetch_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """Fetch events in [start, end). Disconnected sources return an empty list."""
        ...

    async def fetch_today_events(self, as_of: datetime | None = None) -> list[CalendarEvent]:
        """Fetch events from local midnight to 23:59:59 of the current day."""
        ...

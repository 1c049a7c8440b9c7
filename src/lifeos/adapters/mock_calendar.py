"""Mock calendar sources - canned events standing in for real calendars."""

import logging
from datetime import datetime, timedelta

from lifeos.core.calendar import CalendarEvent, EventIntent, day_bounds
from lifeos.core.tasks import Domain

logger = logging.getLogger(__name__)


class MockCalendarSource:
    """
    In-memory calendar.

    Implements CalendarSource protocol.
    """

    def __init__(
        self,
        source: Domain,
        name: str | None = None,
        events: list[CalendarEvent] | None = None,
        source_id: str | None = None,
        connected: bool = True,
    ):
        self.source = source
        self.id = source_id or f"mock-{source.value}"
        self.name = name or f"Mock {source.value} Calendar"
        self._events = list(events or [])
        self._connected = connected

    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    def set_events(self, events: list[CalendarEvent]) -> None:
        """Replace the canned events."""
        self._events = list(events)

    def _events_for(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        return self._events

    async def fetch_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """Events that start and end inside the range."""
        if not self._connected:
            logger.debug(f"{self.name} is disconnected, returning no events")
            return []
        return [e for e in self._events_for(start, end) if start <= e.start and e.end <= end]

    async def fetch_today_events(self, as_of: datetime | None = None) -> list[CalendarEvent]:
        start, end = day_bounds(as_of or datetime.now())
        return await self.fetch_events(start, end)


class GoogleCalendarSource(MockCalendarSource):
    """Mock Google work calendar: a sync and a focus block every day."""

    def __init__(self, connected: bool = True):
        super().__init__(
            Domain.WORK,
            name="Google Calendar",
            source_id="google-calendar",
            connected=connected,
        )

    def _events_for(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        day = start.replace(hour=0, minute=0, second=0, microsecond=0)
        return [
            CalendarEvent(
                id="gcal-1",
                title="Weekly Sync",
                start=day + timedelta(hours=10),
                end=day + timedelta(hours=11),
                source=Domain.WORK,
                intent=EventIntent.COLLABORATIVE,
                provider="google-calendar",
            ),
            CalendarEvent(
                id="gcal-2",
                title="Focus Time",
                start=day + timedelta(hours=14),
                end=day + timedelta(hours=16),
                source=Domain.WORK,
                intent=EventIntent.FOCUS,
                provider="google-calendar",
            ),
        ]

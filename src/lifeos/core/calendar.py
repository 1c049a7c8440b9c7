"""Pure calendar domain logic - no I/O dependencies."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from .tasks import Domain

if TYPE_CHECKING:
    from .capacity import CalendarIntent, StateConfig


class EventIntent(Enum):
    """What an event demands, for capacity management."""

    ESSENTIAL = "essential"  # Cannot be avoided
    FOCUS = "focus"  # Deep work, needs protection
    COLLABORATIVE = "collaborative"  # Meeting/call, social energy
    RECOVERY = "recovery"  # Break, rest
    TRANSITION = "transition"  # Buffer between activities
    FLEXIBLE = "flexible"  # Can be moved or skipped


INTENT_WEIGHTS = {
    EventIntent.RECOVERY: 0,
    EventIntent.TRANSITION: 1,
    EventIntent.FLEXIBLE: 2,
    EventIntent.ESSENTIAL: 3,
    EventIntent.FOCUS: 4,
    EventIntent.COLLABORATIVE: 5,
}


@dataclass
class CalendarEvent:
    """A calendar event supplied by a calendar source."""

    id: str
    title: str
    start: datetime
    end: datetime
    source: Domain
    intent: EventIntent
    description: str = ""
    provider: str = ""
    active: bool = False

    def duration_minutes(self) -> float:
        """Event duration in minutes (negative if end precedes start)."""
        return (self.end - self.start).total_seconds() / 60

    def duration_hours(self) -> float:
        """Hours counted against the calendar cap. Never negative."""
        return max(0.0, self.duration_minutes() / 60)

    def format_time(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"

    @classmethod
    def from_dict(cls, data: dict, provider: str = "") -> "CalendarEvent":
        """Create CalendarEvent from a plain mapping with ISO timestamps."""
        return cls(
            id=data["id"],
            title=data["title"],
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(data["end"]),
            source=Domain(data.get("source", "personal")),
            intent=EventIntent(data.get("intent", "flexible")),
            description=data.get("description", ""),
            provider=data.get("provider", provider),
        )


@dataclass(frozen=True)
class RecoveryBuffer:
    """A synthetic interval protecting the transition after an event."""

    start: datetime
    end: datetime
    duration_minutes: float
    after_event_id: str
    title: str = "Recovery buffer"

    def format(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')} ({self.duration_minutes:g} min)"


@dataclass
class CalendarModulationResult:
    """Active/suggested-cancellation partition of a day's events."""

    total_events: int
    active_events: list[CalendarEvent]
    suggested_cancellations: list[CalendarEvent]
    recovery_buffers: list[RecoveryBuffer]
    total_hours: float
    calendar_limit_exceeded: bool


def sort_events_by_start(events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Sort events by start time. Stable for equal starts."""
    return sorted(events, key=lambda e: e.start)


def should_honor(event: CalendarEvent, intent_config: CalendarIntent) -> bool:
    """Essential events are always honored; others only if their intent is."""
    if event.intent is EventIntent.ESSENTIAL:
        return True
    return event.intent in intent_config.honored_intents


def generate_recovery_buffers(
    events: list[CalendarEvent],
    buffer_minutes: int,
) -> list[RecoveryBuffer]:
    """
    Generate buffers between adjacent, time-ordered events.

    A gap of at least buffer_minutes gets a full buffer from the end of the
    earlier event. A shorter positive gap is filled completely. Back-to-back
    or overlapping pairs get nothing.

    Pure function - no I/O.
    """
    buffers = []

    for current, following in zip(events, events[1:]):
        gap = (following.start - current.end).total_seconds() / 60

        if gap >= buffer_minutes:
            buffers.append(
                RecoveryBuffer(
                    start=current.end,
                    end=current.end + timedelta(minutes=buffer_minutes),
                    duration_minutes=buffer_minutes,
                    after_event_id=current.id,
                )
            )
        elif gap > 0:
            buffers.append(
                RecoveryBuffer(
                    start=current.end,
                    end=following.start,
                    duration_minutes=gap,
                    after_event_id=current.id,
                )
            )

    return buffers


def modulate_calendar(events: list[CalendarEvent], config: StateConfig) -> CalendarModulationResult:
    """
    Partition events into active and suggested-cancellation sets.

    Events are walked in start order against the calendar-hour cap. Essential
    events are admitted even over the cap and still add to the running total,
    so later non-essential events see the inflated total.

    Pure function - no I/O.
    """
    intent_config = config.calendar_intent
    max_hours = config.workload.max_calendar_hours

    active: list[CalendarEvent] = []
    suggested: list[CalendarEvent] = []
    total_hours = 0.0

    for event in sort_events_by_start(events):
        if should_honor(event, intent_config):
            hours = event.duration_hours()
            if total_hours + hours <= max_hours or event.intent is EventIntent.ESSENTIAL:
                active.append(replace(event, active=True))
                total_hours += hours
            else:
                suggested.append(replace(event, active=False))
        elif intent_config.suggest_cancellation:
            suggested.append(replace(event, active=False))
        # Otherwise dropped: neither active nor suggested

    buffers = []
    if intent_config.add_recovery_buffers:
        buffers = generate_recovery_buffers(active, intent_config.buffer_minutes)

    return CalendarModulationResult(
        total_events=len(events),
        active_events=active,
        suggested_cancellations=suggested,
        recovery_buffers=buffers,
        total_hours=total_hours,
        calendar_limit_exceeded=total_hours > max_hours,
    )


def intent_weight(intent: EventIntent) -> int:
    """Capacity-cost weight of an event intent (recovery=0 ... collaborative=5)."""
    return INTENT_WEIGHTS[intent]


def day_bounds(target: datetime) -> tuple[datetime, datetime]:
    """Local midnight to 23:59:59 of the given moment's day."""
    start = target.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start.replace(hour=23, minute=59, second=59)

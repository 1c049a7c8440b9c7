"""Pure daily view assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .calendar import CalendarEvent, CalendarModulationResult, modulate_calendar
from .capacity import StateConfig
from .tasks import Task, TaskModulationResult, modulate_tasks


@dataclass
class DailyView:
    """Modulated tasks and events for the current capacity state."""

    state: str
    config: StateConfig
    tasks: TaskModulationResult
    calendar: CalendarModulationResult
    generated_at: datetime
    energy_budget: int

    def next_task(self) -> Task | None:
        """First visible task, if any."""
        return self.tasks.visible_tasks[0] if self.tasks.visible_tasks else None

    def next_event(self, as_of: datetime | None = None) -> CalendarEvent | None:
        """First active event that has not ended yet."""
        as_of = as_of or self.generated_at
        return next((e for e in self.calendar.active_events if e.end > as_of), None)


def assemble_view(
    state: str,
    config: StateConfig,
    tasks: list[Task],
    events: list[CalendarEvent],
    as_of: datetime | None = None,
) -> DailyView:
    """
    Modulate raw tasks and events under a state's config.

    Pure function - no I/O.
    """
    return DailyView(
        state=state,
        config=config,
        tasks=modulate_tasks(tasks, config),
        calendar=modulate_calendar(events, config),
        generated_at=as_of or datetime.now(),
        energy_budget=config.workload.energy_budget,
    )


def explain_config(config: StateConfig) -> list[str]:
    """
    Plain-language reasons the day looks the way it does.

    Pure function - no I/O.
    """
    visibility = config.task_visibility
    intent = config.calendar_intent
    workload = config.workload

    def names(values) -> str:
        return ", ".join(sorted(v.value for v in values))

    lines = [
        f"Only tasks with priorities [{names(visibility.visible_priorities)}] and cognitive loads "
        f"[{names(visibility.manageable_loads)}] are shown.",
        f"You'll see at most {visibility.max_visible_tasks} tasks, totaling no more than "
        f"{workload.max_daily_minutes} minutes.",
        f"Only calendar events with intents [{names(intent.honored_intents)}] are honored, "
        f"up to {workload.max_calendar_hours:g} hours.",
    ]

    calendar_changes = []
    if intent.suggest_cancellation:
        calendar_changes.append("Other events may be suggested for cancellation.")
    if intent.add_recovery_buffers:
        calendar_changes.append(f"Recovery buffers of {intent.buffer_minutes} minutes are added.")
    if calendar_changes:
        lines.append(" ".join(calendar_changes))

    domains = [d for d, shown in (("work", workload.show_work_tasks), ("personal", workload.show_personal_tasks)) if shown]
    focus = " and ".join(domains) if domains else "no"
    lines.append(f"The focus is on {focus} tasks, with an energy budget of {workload.energy_budget}.")
    return lines

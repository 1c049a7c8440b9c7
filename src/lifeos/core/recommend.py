"""State recommendation from the unmodulated day - no I/O dependencies."""

from dataclasses import dataclass

from .calendar import CalendarEvent, EventIntent
from .capacity import DEFAULT_CATALOG, CapacityCatalog
from .tasks import CognitiveLoad, Priority, Task

LOAD_SCORES = {
    CognitiveLoad.HIGH: 3.0,
    CognitiveLoad.MEDIUM: 2.0,
    CognitiveLoad.LOW: 1.0,
    CognitiveLoad.MINIMAL: 0.5,
}


@dataclass
class Recommendation:
    """A suggested capacity state and why."""

    state: str
    reason: str
    task_count: int
    event_count: int


def recommend_state(
    tasks: list[Task],
    events: list[CalendarEvent],
    catalog: CapacityCatalog = DEFAULT_CATALOG,
) -> Recommendation:
    """
    Suggest a capacity state from the raw load of the day.

    Pure function - no I/O.
    """
    load_score = sum(LOAD_SCORES[t.cognitive_load] for t in tasks)
    collaboration_hours = sum(e.duration_hours() for e in events if e.intent is EventIntent.COLLABORATIVE)
    essentials = sum(1 for t in tasks if t.priority is Priority.ESSENTIAL) + sum(
        1 for e in events if e.intent is EventIntent.ESSENTIAL
    )
    task_minutes = sum(t.minutes for t in tasks)

    if load_score > 15 or collaboration_hours > 4:
        state = "overstimulated"
        reason = (
            f"You have a high cognitive load ({load_score:.1f}) and/or a lot of "
            f"collaboration ({collaboration_hours:.1f} hours)."
        )
    elif essentials > 5:
        state = "anxious"
        reason = f"You have many essential tasks or events ({essentials}), which could be stressful."
    elif task_minutes > 300 and load_score < 10:
        state = "driven"
        reason = f"Your day is full ({task_minutes} mins of tasks), but the cognitive load is manageable."
    elif task_minutes > 120 or load_score > 8:
        state = "flat"
        reason = (
            f"You have a moderate amount of work ({task_minutes} mins) and a moderate "
            f"cognitive load ({load_score:.1f})."
        )
    else:
        state = "foggy"
        reason = "Your day seems light and manageable."

    if state not in catalog:
        state = catalog.default

    return Recommendation(state=state, reason=reason, task_count=len(tasks), event_count=len(events))

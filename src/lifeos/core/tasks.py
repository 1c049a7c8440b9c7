"""Pure task domain logic - no I/O dependencies."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .capacity import StateConfig

DEFAULT_TASK_MINUTES = 15


class Priority(Enum):
    """Task priority, ordered essential > important > normal > optional."""

    ESSENTIAL = "essential"
    IMPORTANT = "important"
    NORMAL = "normal"
    OPTIONAL = "optional"


class Domain(Enum):
    """Life domain a task or calendar belongs to."""

    WORK = "work"
    PERSONAL = "personal"


class CognitiveLoad(Enum):
    """How demanding a task is, ordered minimal < low < medium < high."""

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_RANK = {
    Priority.ESSENTIAL: 0,
    Priority.IMPORTANT: 1,
    Priority.NORMAL: 2,
    Priority.OPTIONAL: 3,
}

COGNITIVE_LOAD_WEIGHTS = {
    CognitiveLoad.MINIMAL: 1,
    CognitiveLoad.LOW: 2,
    CognitiveLoad.MEDIUM: 4,
    CognitiveLoad.HIGH: 8,
}


@dataclass
class Task:
    """A task supplied by a task source."""

    id: str
    title: str
    priority: Priority
    domain: Domain
    cognitive_load: CognitiveLoad
    estimated_minutes: int | None = None
    description: str = ""
    source: str = ""
    visible: bool = False

    @property
    def minutes(self) -> int:
        """Estimated minutes, falling back to the default estimate."""
        if self.estimated_minutes is None:
            return DEFAULT_TASK_MINUTES
        return self.estimated_minutes

    @classmethod
    def from_dict(cls, data: dict, source: str = "") -> "Task":
        """Create Task from a plain mapping (source payloads, fixtures)."""
        return cls(
            id=data["id"],
            title=data["title"],
            priority=Priority(data.get("priority", "normal")),
            domain=Domain(data.get("domain", "personal")),
            cognitive_load=CognitiveLoad(data.get("cognitive_load", "medium")),
            estimated_minutes=data.get("estimated_minutes"),
            description=data.get("description", ""),
            source=data.get("source", source),
        )


@dataclass
class TaskModulationResult:
    """Visible/hidden partition of a task list under one state config."""

    total_tasks: int
    visible_tasks: list[Task]
    hidden_tasks: list[Task]
    total_minutes: int
    workload_limit_reached: bool
    remaining_capacity: int


def is_eligible(task: Task, config: StateConfig) -> bool:
    """
    Check a task against domain, priority and cognitive-load rules.

    Pure function - no I/O.
    """
    workload = config.workload
    if task.domain is Domain.WORK and not workload.show_work_tasks:
        return False
    if task.domain is Domain.PERSONAL and not workload.show_personal_tasks:
        return False

    visibility = config.task_visibility
    if task.priority not in visibility.visible_priorities:
        return False
    return task.cognitive_load in visibility.manageable_loads


def sort_by_priority(tasks: list[Task]) -> list[Task]:
    """Sort tasks essential first. Stable, so ties keep input order."""
    return sorted(tasks, key=lambda t: PRIORITY_RANK[t.priority])


def modulate_tasks(tasks: list[Task], config: StateConfig) -> TaskModulationResult:
    """
    Partition tasks into visible and hidden sets for a state config.

    Eligible tasks are admitted essential-first as one contiguous prefix:
    the first task that would break the count or minute cap stops admission.
    Input tasks are never mutated; results are fresh copies.

    Pure function - no I/O.
    """
    visibility = config.task_visibility
    max_minutes = config.workload.max_daily_minutes

    eligible = [(i, t) for i, t in enumerate(tasks) if is_eligible(t, config)]
    eligible.sort(key=lambda pair: PRIORITY_RANK[pair[1].priority])

    visible: list[Task] = []
    admitted: set[int] = set()
    total_minutes = 0
    limit_reached = False

    for index, task in eligible:
        if len(visible) >= visibility.max_visible_tasks:
            limit_reached = True
            break
        if total_minutes + task.minutes > max_minutes:
            limit_reached = True
            break
        visible.append(replace(task, visible=True))
        admitted.add(index)
        total_minutes += task.minutes

    # Hidden tasks are dropped, not queued: nothing marks them for a later call
    hidden = [replace(t, visible=False) for i, t in enumerate(tasks) if i not in admitted]

    return TaskModulationResult(
        total_tasks=len(tasks),
        visible_tasks=visible,
        hidden_tasks=hidden,
        total_minutes=total_minutes,
        workload_limit_reached=limit_reached,
        remaining_capacity=max(0, max_minutes - total_minutes),
    )


def cognitive_load_weight(load: CognitiveLoad) -> int:
    """Capacity-cost weight of a cognitive load (minimal=1 ... high=8)."""
    return COGNITIVE_LOAD_WEIGHTS[load]


def filter_by_domain(tasks: list[Task], domain: Domain) -> list[Task]:
    """Filter tasks to a single domain."""
    return [t for t in tasks if t.domain is domain]

"""Capacity catalog - per-state configuration records, pure data.

The set of states, the default and the capacity order are data, so a catalog
can be swapped out wholesale (see ``catalog_from_dict``).
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from .calendar import EventIntent
from .tasks import CognitiveLoad, Priority


class CatalogError(ValueError):
    """Raised when catalog data is inconsistent."""


@dataclass(frozen=True)
class TaskVisibility:
    """Which tasks a state can see."""

    visible_priorities: frozenset[Priority]
    manageable_loads: frozenset[CognitiveLoad]
    max_visible_tasks: int


@dataclass(frozen=True)
class Workload:
    """Daily workload limits."""

    max_daily_minutes: int
    max_calendar_hours: float
    show_work_tasks: bool
    show_personal_tasks: bool
    energy_budget: int


@dataclass(frozen=True)
class CalendarIntent:
    """Which events a state honors, and how transitions are protected."""

    honored_intents: frozenset[EventIntent]
    suggest_cancellation: bool
    add_recovery_buffers: bool
    buffer_minutes: int


@dataclass(frozen=True)
class Fallback:
    """Graceful degradation rule."""

    fallback_state: str
    can_auto_degrade: bool
    degrade_triggers: frozenset[str]


@dataclass(frozen=True)
class StateConfig:
    """Complete configuration for a single capacity state."""

    state: str
    description: str
    task_visibility: TaskVisibility
    calendar_intent: CalendarIntent
    workload: Workload
    fallback: Fallback


class CapacityCatalog:
    """
    Immutable mapping from capacity state names to their configs.

    ``order`` lists states from lowest to highest capacity. States missing
    from it are unordered and never rank against another state.
    """

    def __init__(
        self,
        configs: Mapping[str, StateConfig],
        default: str,
        order: Sequence[str] = (),
    ):
        if not configs:
            raise CatalogError("Catalog must define at least one state")
        if default not in configs:
            raise CatalogError(f"Default state {default!r} is not defined")
        for name, config in configs.items():
            if config.state != name:
                raise CatalogError(f"Config for {name!r} is labelled {config.state!r}")
            if config.fallback.fallback_state not in configs:
                raise CatalogError(
                    f"Fallback {config.fallback.fallback_state!r} of {name!r} is not defined"
                )
        for name in order:
            if name not in configs:
                raise CatalogError(f"Ordered state {name!r} is not defined")
        if len(set(order)) != len(order):
            raise CatalogError("Capacity order lists a state twice")

        self._configs = MappingProxyType(dict(configs))
        self.default = default
        self.order = tuple(order)

    @property
    def states(self) -> tuple[str, ...]:
        return tuple(self._configs)

    def __contains__(self, state: object) -> bool:
        return isinstance(state, str) and state in self._configs

    def __iter__(self):
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def config_for(self, state: str) -> StateConfig:
        """Config for a state. Defined for every state in the catalog."""
        return self._configs[state]

    def rank(self, state: str) -> int | None:
        """Position in the capacity order (0 = lowest), or None if unordered."""
        try:
            return self.order.index(state)
        except ValueError:
            return None


def _enum_set(enum_cls, values: Iterable[str], label: str, state: str) -> frozenset:
    try:
        return frozenset(enum_cls(v) for v in values)
    except ValueError as e:
        raise CatalogError(f"Invalid {label} for {state!r}: {e}") from e


def state_config_from_dict(state: str, data: Mapping) -> StateConfig:
    """Build one StateConfig from its JSON-shaped mapping."""
    try:
        visibility = data["task_visibility"]
        intent = data["calendar_intent"]
        workload = data["workload"]
        fallback = data.get("fallback", {})

        return StateConfig(
            state=state,
            description=data.get("description", ""),
            task_visibility=TaskVisibility(
                visible_priorities=_enum_set(Priority, visibility["visible_priorities"], "priority", state),
                manageable_loads=_enum_set(CognitiveLoad, visibility["manageable_loads"], "cognitive load", state),
                max_visible_tasks=int(visibility["max_visible_tasks"]),
            ),
            calendar_intent=CalendarIntent(
                honored_intents=_enum_set(EventIntent, intent["honored_intents"], "intent", state),
                suggest_cancellation=bool(intent["suggest_cancellation"]),
                add_recovery_buffers=bool(intent["add_recovery_buffers"]),
                buffer_minutes=int(intent["buffer_minutes"]),
            ),
            workload=Workload(
                max_daily_minutes=int(workload["max_daily_minutes"]),
                max_calendar_hours=float(workload["max_calendar_hours"]),
                show_work_tasks=bool(workload["show_work_tasks"]),
                show_personal_tasks=bool(workload["show_personal_tasks"]),
                energy_budget=int(workload["energy_budget"]),
            ),
            fallback=Fallback(
                fallback_state=fallback.get("fallback_state", state),
                can_auto_degrade=bool(fallback.get("can_auto_degrade", False)),
                degrade_triggers=frozenset(t.lower() for t in fallback.get("degrade_triggers", [])),
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CatalogError(f"Malformed config for {state!r}: {e}") from e


def catalog_from_dict(data: Mapping) -> CapacityCatalog:
    """
    Build a catalog from JSON-shaped data.

    Expected shape::

        {"default": "foggy",
         "order": ["overstimulated", ...],
         "states": {"foggy": {"description": ..., "task_visibility": {...},
                              "calendar_intent": {...}, "workload": {...},
                              "fallback": {...}}}}
    """
    if not isinstance(data, Mapping):
        raise CatalogError(f"Catalog must be a mapping, not {type(data).__name__}")
    states = data.get("states")
    if not isinstance(states, Mapping):
        raise CatalogError("Catalog needs a 'states' mapping")

    configs = {name: state_config_from_dict(name, cfg) for name, cfg in states.items()}
    default = data.get("default") or next(iter(configs), "")
    order = data.get("order", [])
    if not isinstance(default, str):
        raise CatalogError(f"Default state must be a string, not {default!r}")
    if not isinstance(order, list) or not all(isinstance(name, str) for name in order):
        raise CatalogError("Capacity order must be a list of state names")
    return CapacityCatalog(configs, default=default, order=order)


ALL_PRIORITIES = ["essential", "important", "normal", "optional"]
ALL_LOADS = ["minimal", "low", "medium", "high"]
ALL_INTENTS = ["focus", "collaborative", "recovery", "transition", "flexible", "essential"]

DEFAULT_CATALOG_DATA = {
    "default": "foggy",
    # Lowest to highest capacity. "social" has no agreed position.
    "order": ["overstimulated", "anxious", "foggy", "flat", "driven", "productive"],
    "states": {
        "foggy": {
            "description": "Low clarity, minimal cognitive resources. Safe defaults active.",
            "task_visibility": {
                "visible_priorities": ["essential"],
                "manageable_loads": ["minimal", "low"],
                "max_visible_tasks": 3,
            },
            "calendar_intent": {
                "honored_intents": ["essential", "recovery"],
                "suggest_cancellation": True,
                "add_recovery_buffers": True,
                "buffer_minutes": 30,
            },
            "workload": {
                "max_daily_minutes": 60,
                "max_calendar_hours": 2,
                "show_work_tasks": True,
                "show_personal_tasks": False,
                "energy_budget": 3,
            },
            "fallback": {"fallback_state": "foggy", "can_auto_degrade": False, "degrade_triggers": []},
        },
        "anxious": {
            "description": "High stress/worry. Reduced stimulation, essential tasks only.",
            "task_visibility": {
                "visible_priorities": ["essential"],
                "manageable_loads": ["minimal"],
                "max_visible_tasks": 2,
            },
            "calendar_intent": {
                "honored_intents": ["essential", "recovery", "flexible"],
                "suggest_cancellation": True,
                "add_recovery_buffers": True,
                "buffer_minutes": 45,
            },
            "workload": {
                "max_daily_minutes": 45,
                "max_calendar_hours": 1,
                "show_work_tasks": True,
                "show_personal_tasks": False,
                "energy_budget": 2,
            },
            "fallback": {
                "fallback_state": "foggy",
                "can_auto_degrade": True,
                "degrade_triggers": ["overwhelm", "panic", "shutdown"],
            },
        },
        "flat": {
            "description": "Low energy/motivation. Gentle engagement with small wins.",
            "task_visibility": {
                "visible_priorities": ["essential", "important"],
                "manageable_loads": ["minimal", "low"],
                "max_visible_tasks": 4,
            },
            "calendar_intent": {
                "honored_intents": ["essential", "recovery", "flexible", "collaborative"],
                "suggest_cancellation": False,
                "add_recovery_buffers": True,
                "buffer_minutes": 20,
            },
            "workload": {
                "max_daily_minutes": 90,
                "max_calendar_hours": 3,
                "show_work_tasks": True,
                "show_personal_tasks": True,
                "energy_budget": 4,
            },
            "fallback": {
                "fallback_state": "foggy",
                "can_auto_degrade": True,
                "degrade_triggers": ["exhaustion", "withdrawal"],
            },
        },
        "overstimulated": {
            "description": "Sensory/cognitive overload. Maximum protection, recovery focus.",
            "task_visibility": {
                "visible_priorities": ["essential"],
                "manageable_loads": ["minimal"],
                "max_visible_tasks": 1,
            },
            "calendar_intent": {
                "honored_intents": ["essential", "recovery"],
                "suggest_cancellation": True,
                "add_recovery_buffers": True,
                "buffer_minutes": 60,
            },
            "workload": {
                "max_daily_minutes": 30,
                "max_calendar_hours": 1,
                "show_work_tasks": False,
                "show_personal_tasks": False,
                "energy_budget": 1,
            },
            "fallback": {
                "fallback_state": "foggy",
                "can_auto_degrade": True,
                "degrade_triggers": ["meltdown", "shutdown", "overwhelm"],
            },
        },
        "driven": {
            "description": "High capacity. Full workload available, all systems active.",
            "task_visibility": {
                "visible_priorities": ALL_PRIORITIES,
                "manageable_loads": ALL_LOADS,
                "max_visible_tasks": 15,
            },
            "calendar_intent": {
                "honored_intents": ALL_INTENTS,
                "suggest_cancellation": False,
                "add_recovery_buffers": False,
                "buffer_minutes": 10,
            },
            "workload": {
                "max_daily_minutes": 480,
                "max_calendar_hours": 8,
                "show_work_tasks": True,
                "show_personal_tasks": True,
                "energy_budget": 10,
            },
            "fallback": {
                "fallback_state": "flat",
                "can_auto_degrade": True,
                "degrade_triggers": ["fatigue", "distraction", "depletion"],
            },
        },
        "productive": {
            "description": "Peak capacity. Ready for a challenging workload.",
            "task_visibility": {
                "visible_priorities": ALL_PRIORITIES,
                "manageable_loads": ALL_LOADS,
                "max_visible_tasks": 25,
            },
            "calendar_intent": {
                "honored_intents": ALL_INTENTS,
                "suggest_cancellation": False,
                "add_recovery_buffers": False,
                "buffer_minutes": 5,
            },
            "workload": {
                "max_daily_minutes": 600,
                "max_calendar_hours": 10,
                "show_work_tasks": True,
                "show_personal_tasks": True,
                "energy_budget": 12,
            },
            "fallback": {
                "fallback_state": "driven",
                "can_auto_degrade": True,
                "degrade_triggers": ["burnout", "overextension", "fatigue"],
            },
        },
        "social": {
            "description": "Ready for social engagements. Prioritizes connection over tasks.",
            "task_visibility": {
                "visible_priorities": ["essential", "important"],
                "manageable_loads": ["minimal", "low"],
                "max_visible_tasks": 5,
            },
            "calendar_intent": {
                "honored_intents": ["essential", "collaborative", "recovery", "flexible"],
                "suggest_cancellation": False,
                "add_recovery_buffers": True,
                "buffer_minutes": 15,
            },
            "workload": {
                "max_daily_minutes": 120,
                "max_calendar_hours": 6,
                "show_work_tasks": False,
                "show_personal_tasks": True,
                "energy_budget": 7,
            },
            "fallback": {
                "fallback_state": "flat",
                "can_auto_degrade": True,
                "degrade_triggers": ["social fatigue", "overwhelmed", "withdrawal"],
            },
        },
    },
}

DEFAULT_CATALOG = catalog_from_dict(DEFAULT_CATALOG_DATA)

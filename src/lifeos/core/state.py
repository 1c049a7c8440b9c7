"""Capacity state machine.

Holds the single current state. A change overwrites the prior state; the
only trace of it is the ``previous_state`` on the emitted event.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from .capacity import DEFAULT_CATALOG, CapacityCatalog, StateConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChangeEvent:
    """Emitted to listeners on every effective state change."""

    previous_state: str
    new_state: str
    timestamp: datetime
    reason: str | None
    is_degradation: bool


StateListener = Callable[[StateChangeEvent], None]


class StateMachine:
    """
    Owns the current capacity state for one catalog.

    Transitions: ``set_state`` (any valid, distinct target), ``reset`` (back
    to the catalog default) and ``degrade`` (to the current state's fallback,
    when its rule allows). There is no terminal state.
    """

    def __init__(
        self,
        catalog: CapacityCatalog = DEFAULT_CATALOG,
        initial_state: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.catalog = catalog
        self._clock = clock
        self._listeners: list[StateListener] = []

        if initial_state is not None and initial_state not in catalog:
            logger.warning(f"Unknown initial state {initial_state!r}, using {catalog.default!r}")
            initial_state = None
        self._state = initial_state or catalog.default
        self._state_set_at = clock()

    def current(self) -> str:
        return self._state

    @property
    def state_set_at(self) -> datetime:
        """When the current state was entered."""
        return self._state_set_at

    def config(self) -> StateConfig:
        """Config of the current state."""
        return self.catalog.config_for(self._state)

    def subscribe(self, listener: StateListener) -> None:
        """Register a listener called once per effective state change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_state(self, new_state: str, reason: str | None = None) -> bool:
        """
        Overwrite the current state.

        Returns False without side effects for an unknown state or when the
        state is unchanged; otherwise notifies listeners and returns True.
        """
        if new_state not in self.catalog:
            logger.warning(f"Invalid capacity state: {new_state!r}. Keeping {self._state!r}.")
            return False

        if new_state == self._state:
            return False

        event = StateChangeEvent(
            previous_state=self._state,
            new_state=new_state,
            timestamp=self._clock(),
            reason=reason,
            is_degradation=self.is_degradation(self._state, new_state),
        )

        self._state = new_state
        self._state_set_at = event.timestamp
        logger.info(f"Capacity {event.previous_state} -> {event.new_state} ({reason or 'no reason'})")

        for listener in list(self._listeners):
            listener(event)

        return True

    def reset(self) -> bool:
        """Return to the catalog's default state."""
        return self.set_state(self.catalog.default, "reset to default")

    def degrade(self, trigger: str) -> bool:
        """Move to the current state's fallback if its rule allows."""
        fallback = self.config().fallback

        if not fallback.can_auto_degrade:
            logger.debug(f"Degradation disabled for {self._state!r}")
            return False

        if fallback.fallback_state == self._state:
            logger.debug(f"Already at fallback state {self._state!r}")
            return False

        return self.set_state(fallback.fallback_state, f"degradation triggered: {trigger}")

    def is_degradation(self, from_state: str, to_state: str) -> bool:
        """True iff ``to_state`` ranks strictly below ``from_state``."""
        from_rank = self.catalog.rank(from_state)
        to_rank = self.catalog.rank(to_state)
        if from_rank is None or to_rank is None:
            return False
        return to_rank < from_rank

    def check_triggers(self, indicators: Iterable[str]) -> list[str]:
        """Indicators matching the current state's degrade triggers, case-insensitively."""
        triggers = self.config().fallback.degrade_triggers
        return [i for i in indicators if i.lower() in triggers]

"""Last-state persistence interface."""

from typing import Protocol


class StateStore(Protocol):
    """Interface for remembering the last declared capacity state."""

    def load(self) -> str | None:
        """Last saved state, or None if absent or unusable."""
        ...

    def save(self, state: str) -> None:
        """Overwrite the saved state."""
        ...

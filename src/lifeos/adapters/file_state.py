"""File-based last-state storage adapter."""

import json
import logging
from pathlib import Path

from lifeos.core.capacity import DEFAULT_CATALOG, CapacityCatalog

logger = logging.getLogger(__name__)


class FileStateStore:
    """
    JSON file holding the last declared state.

    Implements StateStore protocol. File shape: ``{"last_state": "foggy"}``.
    """

    def __init__(self, path: Path | str, catalog: CapacityCatalog = DEFAULT_CATALOG):
        self.path = Path(path).expanduser()
        self.catalog = catalog

    def load(self) -> str | None:
        """Saved state, or None when missing, malformed or unknown."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text())
            state = data["last_state"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return None

        if state not in self.catalog:
            logger.warning(f"Ignoring unknown saved state {state!r}")
            return None
        return state

    def save(self, state: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"last_state": state}))

    def clear(self) -> None:
        """Forget the saved state."""
        if self.path.exists():
            self.path.unlink()

"""Configuration management for LifeOS."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

LIFEOS_HOME = Path(os.environ.get("LIFEOS_HOME", Path.home() / "lifeos"))
CONFIG_FILE = LIFEOS_HOME / "config" / "lifeos.conf"
DATA_DIR = LIFEOS_HOME / "data"
STATE_FILE = DATA_DIR / "state.json"

DEFAULT_SOURCES = ["asana", "obsidian", "google-calendar"]


@dataclass
class Config:
    """LifeOS configuration."""

    default_state: str = ""
    catalog_file: str = ""
    state_file: str = ""
    enabled_sources: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))

    @property
    def state_path(self) -> Path:
        """Where the last declared state is kept."""
        if self.state_file:
            return Path(self.state_file).expanduser()
        return STATE_FILE


def _parse_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from lifeos.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value.strip())

        match key:
            case "default_state":
                config.default_state = value.lower()
            case "catalog_file":
                config.catalog_file = value
            case "state_file":
                config.state_file = value
            case "enabled_sources":
                config.enabled_sources = [s.strip() for s in value.split(",") if s.strip()]
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config

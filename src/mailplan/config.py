"""Configuration management for mailplan."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.scheduler import DEFAULT_WORK_HOURS_PER_DAY

logger = logging.getLogger(__name__)

MAILPLAN_HOME = Path(os.environ.get("MAILPLAN_HOME", Path.home() / "mailplan"))
CONFIG_FILE = MAILPLAN_HOME / "config" / "mailplan.conf"
DATA_DIR = MAILPLAN_HOME / "data"


@dataclass
class Config:
    """mailplan configuration."""

    tasks_file: str = ""
    work_hours_per_day: float = DEFAULT_WORK_HOURS_PER_DAY


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from mailplan.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "tasks_file":
                config.tasks_file = value
            case "work_hours_per_day":
                try:
                    hours = float(value)
                except ValueError:
                    logger.warning(f"Invalid WORK_HOURS_PER_DAY: {value!r}, using default")
                    continue
                if hours <= 0:
                    logger.warning(f"WORK_HOURS_PER_DAY must be positive, got {hours}")
                    continue
                config.work_hours_per_day = hours
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config

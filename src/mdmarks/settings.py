"""Settings file I/O for mdmarks.

Reads a JSON settings file at XDG_CONFIG_HOME/mdmarks/settings.json and
turns it into a RenderConfig. Import as: import mdmarks.settings
"""

import json
import logging
import os
from pathlib import Path

from mdmarks.config import RenderConfig

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / mdmarks / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "mdmarks" / "settings.json"


def load_settings(path: Path | None = None) -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = path or get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError):
        logger.warning("unreadable settings file %s, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("settings file %s is not a JSON object, using defaults", path)
        return {}
    return data


def load_config(path: Path | None = None) -> RenderConfig:
    """Build the render config from the settings file over the defaults.

    Raises ConfigError when the file holds invalid option values.
    """
    return RenderConfig.from_dict(load_settings(path))

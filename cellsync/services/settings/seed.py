"""
Local Settings Seed

Optional YAML file providing the initial settings sections before the
first load from the agent, e.g.:

    Logs:
      Folder: /var/log/cells-sync
    Service:
      AutoStart: true
"""

from pathlib import Path
from typing import Any

import yaml

from ...common.logging_setup import get_service_logger

logger = get_service_logger("settings.seed")


def load_seed(path: str | Path) -> dict[str, Any]:
    """Load seed data from YAML; missing or broken files give an empty seed"""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Seed file not found: {path}")
        return {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing seed file: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Seed file {path} must contain a mapping, got {type(data).__name__}")
        return {}

    return data

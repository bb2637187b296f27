"""YAML config loader with runtime get/set."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from skyview.config.schema import SkyviewConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> SkyviewConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return SkyviewConfig()
    path = Path(path)
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return SkyviewConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return SkyviewConfig(**raw)


def get_config_value(config: SkyviewConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: SkyviewConfig, dotted_key: str, value: Any) -> SkyviewConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new SkyviewConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(value, str):
        if isinstance(old_value, bool):
            value = value.lower() in ("1", "true", "yes", "on")
        elif isinstance(old_value, int):
            value = int(value)
        elif isinstance(old_value, float):
            value = float(value)
    target[parts[-1]] = value
    return SkyviewConfig(**data)


def save_config(config: SkyviewConfig, path: str | Path) -> None:
    """Write the full config back to a YAML file, creating parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
    logger.info("Config written to %s", path)

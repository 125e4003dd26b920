from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("cowcatalog.config.yaml")

ALLOWED_BACKENDS = ("sqlite", "memory")
ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

BASE_CONFIG: Dict[str, Dict[str, Any]] = {
    "storage": {
        "backend": "sqlite",
        "sqlite_path": "cowcatalog.db",
        "slot_key": "cow_catalog_data",
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Overlay user sections on the built-in defaults, one level deep."""
    merged = deepcopy(BASE_CONFIG)
    for section, defaults in merged.items():
        user_section = config.get(section) or {}
        if not isinstance(user_section, dict):
            raise ValueError(f"Config section '{section}' must be a dictionary")
        defaults.update(user_section)
    return merged


def _validate(config: Dict[str, Dict[str, Any]]) -> None:
    storage = config["storage"]
    if storage["backend"] not in ALLOWED_BACKENDS:
        raise ValueError(
            f"storage.backend must be one of {', '.join(ALLOWED_BACKENDS)}, got {storage['backend']!r}"
        )
    for field in ("sqlite_path", "slot_key"):
        if not isinstance(storage[field], str) or not storage[field].strip():
            raise ValueError(f"storage.{field} must be a non-empty string")

    level = str(config["logging"]["level"]).upper()
    if level not in ALLOWED_LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {', '.join(ALLOWED_LOG_LEVELS)}, got {level!r}")
    config["logging"]["level"] = level


def default_config() -> Dict[str, Dict[str, Any]]:
    return deepcopy(BASE_CONFIG)


def load_config(path: Path | None = None) -> Dict[str, Dict[str, Any]]:
    """
    Load catalog configuration from YAML.

    Args:
        path: Optional path to a config file. Defaults to cowcatalog.config.yaml
            in the working directory; if that file is absent the built-in
            defaults are returned.

    Returns:
        Dictionary with 'storage' and 'logging' sections, defaults applied

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return default_config()

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Config must be a dictionary")

    config = _merge_defaults(raw)
    _validate(config)
    return config

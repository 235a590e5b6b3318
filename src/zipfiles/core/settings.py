# src/zipfiles/core/settings.py
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from zipfiles.config import (
    ANNOTATE_KEY,
    CONFIG_FILENAME,
    DEFAULT_SETTINGS,
    EXCLUDE_KEY,
    INCLUDE_KEY,
    USER_SETTINGS_FILENAME,
)
from zipfiles.errors import ConfigError
from zipfiles.models import Configuration

logger = logging.getLogger(__name__)

_PATTERN_KEYS = (INCLUDE_KEY, EXCLUDE_KEY)

def parse_config(data: Any, path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Validates a decoded config object and returns the recognised keys.
    Any subset of the keys may be present; a wrong type anywhere rejects
    the whole source.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"expected a JSON object, got {type(data).__name__}", path)

    parsed: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _PATTERN_KEYS:
            if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
                raise ConfigError(f"'{key}' must be an array of strings", path)
            parsed[key] = list(value)
        elif key == ANNOTATE_KEY:
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be a boolean", path)
            parsed[key] = value
        else:
            logger.debug("Ignoring unknown config key '%s' in %s", key, path)
    return parsed

def load_config_file(path: Path) -> Optional[Dict[str, Any]]:
    """
    Reads one JSON config source.
    Returns None when the file is absent, or when it is broken (a warning
    is logged and the caller falls back to the next source).
    """
    if not path.exists():
        logger.debug("No config file at %s", path)
        return None

    try:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON ({e})", path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"cannot read file ({e})", path) from e
        config = parse_config(data, path)
    except ConfigError as e:
        logger.warning("Ignoring config file: %s", e)
        return None

    logger.debug("Loaded config from %s: %s", path, config)
    return config

def project_config_path(base_dir: Path) -> Path:
    return base_dir / CONFIG_FILENAME

def user_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "zipfiles" / USER_SETTINGS_FILENAME

def resolve_config(
    project: Optional[Mapping[str, Any]] = None,
    user: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Configuration:
    """Merges config sources key by key: project > user > defaults."""
    sources = [s for s in (project, user, defaults or DEFAULT_SETTINGS) if s]

    def pick(key: str) -> Any:
        for source in sources:
            if source.get(key) is not None:
                return source[key]
        return DEFAULT_SETTINGS[key]

    config = Configuration(
        include_patterns=tuple(pick(INCLUDE_KEY)),
        exclude_patterns=tuple(pick(EXCLUDE_KEY)),
        annotate=bool(pick(ANNOTATE_KEY)),
    )
    logger.debug("Resolved configuration: %s", config)
    return config

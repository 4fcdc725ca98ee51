"""
Settings Module for AI Puzzle Suite

Persists the last opened puzzle, the solver's expansion ceiling and the
debug flag in config.json in the working directory. Unknown keys are kept
as-is; known keys with unusable values are replaced by their defaults.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "last_puzzle": "eight_puzzle",
    "max_expansions": 500000,
}


def _check_value(key: str, value: Any) -> bool:
    """Whether a stored value is usable for a known key."""
    if key == "debug_enabled":
        return isinstance(value, bool)
    if key == "last_puzzle":
        # Imported here so settings can load before the puzzles register.
        from puzzle_suite.puzzles import get_puzzle_names
        return value in get_puzzle_names()
    if key == "max_expansions":
        # None means unbounded
        return value is None or (isinstance(value, int) and not isinstance(value, bool)
                                 and value > 0)
    return True


def _sanitize(stored: Dict[str, Any]) -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    for key, value in stored.items():
        if _check_value(key, value):
            result[key] = value
        else:
            logger.warning(f"Ignoring invalid setting {key}={value!r}, "
                           f"using {DEFAULT_SETTINGS.get(key)!r}")
    return result


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings merged over DEFAULT_SETTINGS. Defaults alone if the file is
        missing or unreadable.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            raise ValueError("settings root must be an object")
    except (ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    result = _sanitize(stored)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> bool:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        True if the file was written
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
        return False
    logger.debug(f"Settings saved: {settings}")
    return True


def update_setting(key: str, value: Any, path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Change one setting and write the file.

    Raises:
        ValueError: If the value is not usable for the key
    """
    if not _check_value(key, value):
        raise ValueError(f"Invalid value for {key}: {value!r}")
    settings = load_settings(path)
    settings[key] = value
    save_settings(settings, path)
    return settings

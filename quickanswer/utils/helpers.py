"""
Helper utilities for QuickAnswer.

Provides common functions used across handlers:
- Settings loading
- Logging setup
- HTML snippets for answer content
"""

import html
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
from loguru import logger

SETTINGS_ENV = "QUICKANSWER_SETTINGS"

DEFAULT_SETTINGS = {
    "logging": {
        "level": "INFO",
    },
    "search": {
        "disabled": [],
    },
    "calculator": {
        "max_length": 500,
    },
    "definition": {
        "api_url": "https://api.dictionaryapi.dev/api/v2/entries/en/{word}",
        "timeout": 10.0,
        "max_definitions": 3,
        "user_agent": "QuickAnswer/0.1",
    },
}


def default_settings_path() -> Path:
    """Settings file location: $QUICKANSWER_SETTINGS, else data/settings.toml."""
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent / "data" / "settings.toml"


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file; defaults to default_settings_path()

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "logging": {"level": "INFO"},
            "search": {"disabled": ["definition"]},
            "calculator": {"max_length": 500},
            "definition": {"timeout": 10.0, "max_definitions": 3, ...}
        }
    """
    settings_path = Path(path) if path else default_settings_path()

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError):
        logger.exception(f"Could not load settings from {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = {key: _copy_value(value) for key, value in base.items()}

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = _copy_value(value)

    return result


def _copy_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _deep_merge(value, {})
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with one at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def escape(text: str) -> str:
    """Escape user input for embedding in answer HTML."""
    return html.escape(text, quote=True)


def labeled(label: str, value: str, code: bool = False) -> str:
    """Render a '<strong>Label:</strong> value<br>' line; value is escaped."""
    body = f"<code>{escape(value)}</code>" if code else escape(value)
    return f"<strong>{label}:</strong> {body}<br>"

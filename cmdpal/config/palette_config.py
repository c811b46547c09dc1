"""
cmdpal palette configuration.

Handles persistence of palette tuning (debounce, caps) and the theme mode.
Config is stored in ~/.config/cmdpal/palette_config.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .constants import (
    CMDPAL_CONFIG_DIR,
    DEFAULT_DOMAIN_LIMIT,
    PALETTE_CONFIG_FILENAME,
    REMOTE_SEARCH_DEBOUNCE_SECONDS,
    REMOTE_SEARCH_LIMIT,
    REMOTE_SEARCH_TIMEOUT_SECONDS,
    THEME_MODES,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "debounce_ms": int(REMOTE_SEARCH_DEBOUNCE_SECONDS * 1000),
    "domain_limit": DEFAULT_DOMAIN_LIMIT,
    "remote_limit": REMOTE_SEARCH_LIMIT,
    "remote_timeout_seconds": REMOTE_SEARCH_TIMEOUT_SECONDS,
    "theme_mode": "dark",
}


def get_palette_config_path() -> Path:
    """
    Get path to palette config file.

    Returns:
        Path to ~/.config/cmdpal/palette_config.json
    """
    CMDPAL_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CMDPAL_CONFIG_DIR / PALETTE_CONFIG_FILENAME


def load_palette_config() -> dict[str, Any]:
    """
    Load palette configuration from file.

    Returns:
        Config dict, or defaults if file doesn't exist or is invalid
    """
    path = get_palette_config_path()
    if path.exists():
        try:
            config = json.loads(path.read_text())
            if not isinstance(config, dict):
                return DEFAULT_CONFIG.copy()
            # Merge with defaults to handle missing keys
            return _coerce({**DEFAULT_CONFIG, **config})
        except (json.JSONDecodeError, OSError):
            return DEFAULT_CONFIG.copy()
    return DEFAULT_CONFIG.copy()


def _coerce(config: dict[str, Any]) -> dict[str, Any]:
    """Replace hand-edited values of the wrong type with their defaults."""
    for key in ("debounce_ms", "domain_limit", "remote_limit"):
        try:
            value = int(config[key])
        except (TypeError, ValueError):
            value = -1
        config[key] = value if value >= 0 else DEFAULT_CONFIG[key]

    timeout = config["remote_timeout_seconds"]
    if timeout is not None:
        try:
            config["remote_timeout_seconds"] = float(timeout)
        except (TypeError, ValueError):
            config["remote_timeout_seconds"] = DEFAULT_CONFIG["remote_timeout_seconds"]
    return config


def save_palette_config(config: dict[str, Any]) -> None:
    """
    Save palette configuration to file.

    Args:
        config: Configuration dict to save
    """
    path = get_palette_config_path()
    try:
        path.write_text(json.dumps(config, indent=2) + "\n")
    except OSError:
        # Config is non-critical
        pass


def get_debounce_seconds() -> float:
    """Remote search debounce window in seconds."""
    return float(load_palette_config().get("debounce_ms", DEFAULT_CONFIG["debounce_ms"])) / 1000


def get_theme_mode() -> str:
    """
    Get current theme mode from config.

    Returns:
        One of "dark", "light" or "system"
    """
    mode = str(load_palette_config().get("theme_mode", "dark"))
    return mode if mode in THEME_MODES else "dark"


def cycle_theme_mode() -> str:
    """Advance dark -> light -> system -> dark, persist, and return the new mode."""
    current = get_theme_mode()
    next_mode = THEME_MODES[(THEME_MODES.index(current) + 1) % len(THEME_MODES)]
    config = load_palette_config()
    config["theme_mode"] = next_mode
    save_palette_config(config)
    return next_mode

# src/windcfg/constants.py
"""Central constants used across the project."""

from typing import Any


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_MAX_WORKERS: int = 4

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = True
DEFAULT_MODE: str = "all"
DEFAULT_PRECEDENCE: str = "last"

# Name of the key, inside a nested token mapping, that stands for the parent
# path itself (e.g. colors.indigo.DEFAULT -> colors.indigo).
DEFAULT_TOKEN_KEY: str = "DEFAULT"

# Built-in theme the user's overrides are applied to.
# Kept deliberately small: downstream generators bring their own full palette.
DEFAULT_BASE_THEME: dict[str, Any] = {
    "colors": {
        "inherit": "inherit",
        "current": "currentColor",
        "transparent": "transparent",
        "black": "#000",
        "white": "#fff",
    },
}

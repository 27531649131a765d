# src/windcfg/utils/__init__.py

from .utils_paths import shorten_path_for_display


__all__ = [
    "shorten_path_for_display",
]

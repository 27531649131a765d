# src/windcfg/config/config_resolve.py


import argparse
from pathlib import Path
from typing import Any

from windcfg.constants import DEFAULT_LOG_LEVEL, DEFAULT_MODE, DEFAULT_STRICT_CONFIG
from windcfg.logs import getAppLogger
from windcfg.patterns import normalize_pattern

from .config_types import (
    ContentEntryResolved,
    OriginType,
    RootConfig,
    RootConfigResolved,
    ThemeConfigResolved,
)


def _resolve_log_level(arg_level: str | None, config_level: Any) -> str:
    """log_level: arg -> env -> config -> default."""
    logger = getAppLogger()
    args = argparse.Namespace(log_level=arg_level) if arg_level else None
    root_level = config_level if isinstance(config_level, str) else None
    level = logger.determineLogLevel(args=args, root_log_level=root_level)
    if not isinstance(logger.resolve_level_name(level), int):
        logger.warning(
            "Unknown log level %r; using %r instead.", level, DEFAULT_LOG_LEVEL
        )
        level = DEFAULT_LOG_LEVEL
    return str(level).lower()


def _resolve_content(
    patterns: list[str],
    root: Path,
    origin: OriginType,
) -> list[ContentEntryResolved]:
    logger = getAppLogger()
    entries: list[ContentEntryResolved] = []
    for raw in patterns:
        entry: ContentEntryResolved = {
            "pattern": normalize_pattern(raw),
            "root": root,
            "raw": raw,
            "origin": origin,
        }
        logger.trace(f"[resolve_content] {raw!r} → {entry['pattern']!r} ({origin})")
        entries.append(entry)
    return entries


def _resolve_theme(theme: dict[str, Any] | None) -> ThemeConfigResolved:
    theme = theme or {}
    return {
        "overrides": {str(k): v for k, v in theme.items() if k != "extend"},
        "extend": dict(theme.get("extend") or {}),
    }


def resolve_config(
    parsed_cfg: RootConfig | None,
    *,
    config_path: Path | None = None,
    cwd: Path | None = None,
    log_level: str | None = None,
) -> RootConfigResolved:
    """Fully resolve a parsed config into concrete values.

    Content patterns are anchored at the config file's directory, or at
    `cwd` when the config did not come from a file.

    The log level comes from the `log_level` argument, then WINDCFG_LOG_LEVEL
    or LOG_LEVEL, then the config, then the default. It is applied to the
    app logger.
    """
    logger = getAppLogger()
    cfg: dict[str, Any] = dict(parsed_cfg or {})

    cwd_path = Path(cwd or Path.cwd()).resolve()
    if config_path is not None:
        config_root = Path(config_path).resolve().parent
        origin: OriginType = "config"
    else:
        config_root = cwd_path
        origin = "code"

    level = _resolve_log_level(log_level, cfg.get("log_level"))
    logger.setLevel(level.upper())

    strict = cfg.get("strict_config")
    resolved: RootConfigResolved = {
        "content": _resolve_content(
            list(cfg.get("content") or []), config_root, origin
        ),
        "theme": _resolve_theme(cfg.get("theme")),
        "mode": cfg.get("mode") or DEFAULT_MODE,
        "plugins": list(cfg.get("plugins") or []),
        "strict_config": strict if isinstance(strict, bool) else DEFAULT_STRICT_CONFIG,
        "log_level": level,
        "__meta__": {
            "config_path": Path(config_path).resolve() if config_path else None,
            "config_root": config_root,
        },
    }

    logger.debug(
        "Resolved config: %d content pattern(s), theme keys %s, mode=%s",
        len(resolved["content"]),
        sorted(resolved["theme"]["overrides"]) + ["extend"],
        resolved["mode"],
    )
    return resolved

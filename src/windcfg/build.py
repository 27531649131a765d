# src/windcfg/build.py
"""Build-driver entry points: resolve content files and theme tokens together."""

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apathetic_utils import plural

from .config import (
    ContentEntryResolved,
    RootConfigResolved,
    find_config,
    load_and_validate_config,
    resolve_config,
)
from .constants import DEFAULT_BASE_THEME
from .content import ContentResolution, resolve_content
from .errors import InvalidPatternError, ResolutionWarning
from .logs import getAppLogger
from .theme import flatten_tokens, resolve_references, resolve_theme
from .utils import shorten_path_for_display


@dataclass
class ProjectResolution:
    """Everything downstream generators need from one build invocation."""

    files: frozenset[Path]
    tokens: dict[str, Any]
    flat_tokens: dict[str, Any]
    mode: str
    plugins: list[Any] = field(default_factory=list)
    warnings: list[ResolutionWarning] = field(default_factory=list)
    errors: list[InvalidPatternError] = field(default_factory=list)


def build_tokens(
    theme_cfg: dict[str, Any] | None,
    base_theme: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge a theme config into the base theme and expand references."""
    logger = getAppLogger()
    base = DEFAULT_BASE_THEME if base_theme is None else base_theme
    merged = resolve_theme(base, theme_cfg)
    tokens = resolve_references(merged)
    logger.debug("Resolved %d theme token(s)", len(flatten_tokens(tokens)))
    return tokens


def resolve_entries(
    entries: list[ContentEntryResolved],
    default_root: Path,
    *,
    strict: bool = True,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> ContentResolution:
    """Resolve resolved content entries, each against its own `root`.

    Entries sharing a root are resolved together. With several roots the
    file sets are unioned and the result is rooted at their common parent.
    `default_root` is used when there are no entries at all.
    """
    logger = getAppLogger()
    by_root: dict[Path, list[str]] = {}
    for entry in entries:
        logger.trace(
            f"[ENTRY] {entry['raw']!r} under {entry['root']} ({entry['origin']})"
        )
        by_root.setdefault(entry["root"], []).append(entry["pattern"])
    if not by_root:
        by_root[default_root] = []

    results = [
        resolve_content(
            patterns,
            entry_root,
            strict=strict,
            max_workers=max_workers,
            cancel_event=cancel_event,
        )
        for entry_root, patterns in by_root.items()
    ]
    if len(results) == 1:
        return results[0]

    common = Path(os.path.commonpath([str(r.root) for r in results]))
    return ContentResolution(
        root=common,
        files=frozenset().union(*(r.files for r in results)),
        warnings=list(dict.fromkeys(w for r in results for w in r.warnings)),
        errors=[e for r in results for e in r.errors],
    )


def resolve_project(
    config: RootConfigResolved,
    *,
    base_theme: dict[str, Any] | None = None,
    cancel_event: threading.Event | None = None,
    max_workers: int | None = None,
) -> ProjectResolution:
    """Resolve the content file set and the token table for one config.

    The two halves share nothing and run concurrently. With
    `strict_config` on, an invalid content pattern raises; otherwise it is
    reported on the result and the other patterns still resolve.
    """
    logger = getAppLogger()
    meta = config.get("__meta__")
    root = meta["config_root"] if meta else Path.cwd()
    theme_cfg: dict[str, Any] = {
        **config["theme"]["overrides"],
        "extend": config["theme"]["extend"],
    }

    with ThreadPoolExecutor(max_workers=2) as executor:
        content_future = executor.submit(
            resolve_entries,
            config["content"],
            root,
            strict=config["strict_config"],
            max_workers=max_workers,
            cancel_event=cancel_event,
        )
        tokens_future = executor.submit(build_tokens, theme_cfg, base_theme)
        content: ContentResolution = content_future.result()
        tokens = tokens_future.result()

    for warning in content.warnings:
        logger.debug(
            "Skipped %s",
            shorten_path_for_display(warning.path, cwd=Path.cwd(), root=content.root),
        )
    logger.info(
        "Resolved %d content file%s and %d theme token%s",
        len(content.files),
        plural(content.files),
        len(flatten_tokens(tokens)),
        plural(flatten_tokens(tokens)),
    )

    return ProjectResolution(
        files=content.files,
        tokens=tokens,
        flat_tokens=flatten_tokens(tokens),
        mode=config["mode"],
        plugins=list(config["plugins"]),
        warnings=content.warnings,
        errors=content.errors,
    )


def resolve_from_path(
    config_path: Path | str | None = None,
    *,
    cwd: Path | None = None,
    base_theme: dict[str, Any] | None = None,
    precedence: str | None = None,
    cancel_event: threading.Event | None = None,
) -> ProjectResolution:
    """Find, load, validate and resolve a config file, then resolve the project.

    Raises:
        FileNotFoundError: no config file could be found.
        ConfigError: the config failed to load or validate.
    """
    cwd_path = Path(cwd or Path.cwd())
    found = find_config(cwd_path, explicit=config_path)
    if found is None:
        xmsg = f"No config file found in {cwd_path} or parents"
        raise FileNotFoundError(xmsg)

    parsed, _summary = load_and_validate_config(found, precedence=precedence)
    resolved = resolve_config(parsed, config_path=found, cwd=cwd_path)
    return resolve_project(
        resolved,
        base_theme=base_theme,
        cancel_event=cancel_event,
    )

# src/windcfg/config/config_loader.py


import sys
import traceback
from pathlib import Path
from typing import Any, cast

from apathetic_schema import ValidationSummary
from apathetic_utils import (
    cast_hint,
    literal_to_set,
    load_jsonc,
    load_toml,
    plural,
    remove_path_in_error_message,
)

from windcfg.constants import DEFAULT_PRECEDENCE
from windcfg.errors import ConfigError
from windcfg.logs import getAppLogger
from windcfg.meta import PROGRAM_CONFIG
from windcfg.theme import count_leaves

from .config_types import Precedence, RootConfig
from .config_validate import validate_config


PYPROJECT = "pyproject.toml"


def _pyproject_has_section(path: Path) -> bool:
    try:
        data = load_toml(path) or {}
    except ValueError as e:
        getAppLogger().warning("Ignoring unreadable %s: %s", path, e)
        return False
    return PROGRAM_CONFIG in data.get("tool", {})


def find_config(
    cwd: Path,
    *,
    explicit: Path | str | None = None,
    missing_level: str = "error",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.

    Search order:
      1. Explicit path
      2. From cwd up to the filesystem root, the first directory holding
         .{PROGRAM_CONFIG}.py, .{PROGRAM_CONFIG}.jsonc, .{PROGRAM_CONFIG}.json,
         or a pyproject.toml with a [tool.{PROGRAM_CONFIG}] table.

    Returns the first matching path, or None if no config was found.
    """
    logger = getAppLogger()

    if logger.resolve_level_name(missing_level) is None:
        logger.error("Invalid log level name in find_config(): %s", missing_level)
        missing_level = "error"

    # --- 1. Explicit config path ---
    if explicit:
        config = Path(explicit).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files (search current dir and parents) ---
    current = Path(cwd).resolve()
    candidate_names = [
        f".{PROGRAM_CONFIG}.py",
        f".{PROGRAM_CONFIG}.jsonc",
        f".{PROGRAM_CONFIG}.json",
    ]
    found: list[Path] = []
    while True:
        found = [current / name for name in candidate_names]
        found = [p for p in found if p.exists()]
        pyproject = current / PYPROJECT
        if not found and pyproject.is_file() and _pyproject_has_section(pyproject):
            found = [pyproject]
        if found:
            break
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    if not found:
        # Expected absence, soft failure
        logger.logDynamic(missing_level, "No config file found in %s or parents", cwd)
        return None

    # --- 3. Handle multiple matches at same level (.py > .jsonc > .json) ---
    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            names,
            found[0].name,
        )
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Load configuration data from a file.

    Supports:
      - Python configs: .py files exporting `config`
      - JSON/JSONC configs: .json, .jsonc files
      - pyproject.toml: the [tool.windcfg] table

    Returns:
        The raw object defined in the config (dict, list, or None).
        A list holds several declarations; see select_declaration().

    Raises:
        ConfigError: if the file cannot be executed or parsed.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    # --- Python config ---
    if config_path.suffix == ".py":
        config_globals: dict[str, Any] = {}

        # Allow local imports in Python configs (configs are trusted user code)
        parent_dir = str(config_path.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        try:
            source = config_path.read_text(encoding="utf-8")
            code = compile(source, str(config_path), "exec")
            exec(code, config_globals)  # noqa: S102
            logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
        except Exception as e:
            tb = traceback.format_exc()
            xmsg = (
                f"Error while executing Python config: {config_path.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            raise ConfigError(xmsg) from e
        finally:
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)

        if "config" not in config_globals:
            xmsg = f"{config_path.name} did not define `config`"
            raise ConfigError(xmsg)

        result = config_globals["config"]
        if not isinstance(result, (dict, list, type(None))):
            xmsg = (
                f"config in {config_path.name} must be a dict, list, or None"
                f", not {type(result).__name__}"
            )
            raise ConfigError(xmsg)
        return cast("dict[str, Any] | list[Any] | None", result)

    # --- pyproject.toml, JSONC / JSON ---
    try:
        if config_path.name == PYPROJECT:
            data = load_toml(config_path, required=True) or {}
            table = data.get("tool", {}).get(PROGRAM_CONFIG)
            return cast("dict[str, Any] | None", table)
        return load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ConfigError(xmsg) from e


def select_declaration(
    declarations: list[dict[str, Any]],
    precedence: Precedence | str = DEFAULT_PRECEDENCE,
) -> dict[str, Any]:
    """Pick one declaration when a config source declares several.

    - "first": the first declaration
    - "last": the last declaration
    - "richest": most theme tokens; ties go to the later declaration
    """
    logger = getAppLogger()
    if not declarations:
        xmsg = "No configuration declarations to choose from"
        raise ConfigError(xmsg)
    if precedence not in literal_to_set(Precedence):
        xmsg = f"Unknown declaration precedence {precedence!r}"
        raise ConfigError(xmsg)

    if precedence == "first":
        index = 0
    elif precedence == "last":
        index = len(declarations) - 1
    else:
        scores = [count_leaves(d.get("theme") or {}) for d in declarations]
        best = max(scores)
        index = max(i for i, score in enumerate(scores) if score == best)

    if len(declarations) > 1:
        logger.warning(
            "Config declares %d configurations; using #%d (precedence=%s).",
            len(declarations),
            index + 1,
            precedence,
        )
    return declarations[index]


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
    *,
    precedence: Precedence | str | None = None,
) -> RootConfig | None:
    """Normalize a raw config object into a single RootConfig dict.

    Accepts a single declaration (dict) or several (list of dicts). When
    several are given, the `precedence` argument wins over any `precedence`
    key the declarations carry, which wins over the default ("last").
    """
    logger = getAppLogger()
    if raw_config is None:
        return None

    if isinstance(raw_config, dict):
        return cast_hint(RootConfig, dict(raw_config))

    items = cast_hint(list[Any], raw_config)
    bad = [i + 1 for i, item in enumerate(items) if not isinstance(item, dict)]
    if bad:
        xmsg = f"Config declaration{plural(bad)} {bad} must be objects with named keys"
        raise ConfigError(xmsg)
    if not items:
        return None

    declared = [d["precedence"] for d in items if isinstance(d.get("precedence"), str)]
    chosen_precedence = precedence or (declared[-1] if declared else DEFAULT_PRECEDENCE)
    logger.trace(
        f"[parse_config] {len(items)} declarations, precedence={chosen_precedence}"
    )
    return cast_hint(RootConfig, dict(select_declaration(items, chosen_precedence)))


def _validation_summary(summary: ValidationSummary, config_path: Path) -> None:
    """Log the validation result in a compact, human-readable way."""
    logger = getAppLogger()
    for msg in summary.errors:
        logger.error("%s: %s", config_path.name, msg)
    for msg in summary.strict_warnings:
        logger.error("%s (strict): %s", config_path.name, msg)
    for msg in summary.warnings:
        logger.warning("%s: %s", config_path.name, msg)


def load_and_validate_config(
    config_path: Path,
    *,
    precedence: Precedence | str | None = None,
    strict: bool | None = None,
) -> tuple[RootConfig, ValidationSummary]:
    """Load, parse and validate a config file.

    Raises:
        ConfigError: the file could not be loaded or failed validation.
    """
    raw = load_config(config_path)
    parsed = parse_config(raw, precedence=precedence)
    if parsed is None:
        # Intentionally empty config: nothing to scan, base theme only
        parsed = RootConfig()

    summary = validate_config(parsed, strict=strict)
    _validation_summary(summary, config_path)
    if not summary.valid:
        count = len(summary.errors) + len(summary.strict_warnings)
        xmsg = (
            f"Configuration '{config_path.name}' is invalid"
            f" ({count} problem{plural(count)})"
        )
        raise ConfigError(xmsg)
    return parsed, summary

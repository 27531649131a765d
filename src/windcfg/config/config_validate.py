# src/windcfg/config/config_validate.py


from collections.abc import Mapping
from difflib import get_close_matches
from typing import Any

from apathetic_schema import ValidationSummary, collect_msg
from apathetic_utils import literal_to_set, plural

from windcfg.constants import DEFAULT_MODE, DEFAULT_STRICT_CONFIG
from windcfg.logs import getAppLogger

from .config_types import Precedence, RootConfig


# --- constants ------------------------------------------------------

DEFAULT_HINT_CUTOFF: float = 0.75

KNOWN_MODES = {DEFAULT_MODE}

# Example values quoted in type errors
FIELD_EXAMPLES: dict[str, str] = {
    "content": '["./src/**/*.{rs,html,css}"]',
    "theme": '{"extend": {"colors": {"black": "var(--color-black)"}}}',
    "theme.extend": '{"colors": {"black": "var(--color-black)"}}',
    "mode": '"all"',
    "plugins": "[]",
    "strict_config": "true",
    "log_level": '"debug"',
    "precedence": '"last"',
}

ROOT_TYPES: dict[str, tuple[type, ...]] = {
    "content": (list,),
    "theme": (dict,),
    "mode": (str,),
    "plugins": (list,),
    "strict_config": (bool,),
    "log_level": (str,),
    "precedence": (str,),
}


# --- helpers --------------------------------------------------------


def _type_error(key: str, expected: str, val: Any) -> str:
    example = FIELD_EXAMPLES.get(key)
    exmsg = f" (e.g. {example})" if example else ""
    return f"key `{key}` expected {expected}{exmsg}, got {type(val).__name__}"


def _check_unknown_keys(
    cfg: Mapping[str, Any],
    *,
    strict: bool,
    summary: ValidationSummary,
) -> None:
    known = RootConfig.__annotations__.keys()
    unknown = [str(k) for k in cfg if k not in known]
    if not unknown:
        return

    joined = ", ".join(f"`{u}`" for u in unknown)
    msg = f"Unknown key{plural(unknown)} {joined} in top-level configuration."

    hints: list[str] = []
    for k in unknown:
        close = get_close_matches(k, known, n=1, cutoff=DEFAULT_HINT_CUTOFF)
        if close:
            hints.append(f"'{k}' → '{close[0]}'")
    if hints:
        msg += "\nHint: did you mean " + ", ".join(hints) + "?"

    collect_msg(msg, strict=strict, summary=summary)


def _validate_token_tree(
    tree: Any,
    path: str,
    *,
    strict: bool,
    summary: ValidationSummary,
) -> None:
    """Theme leaves must be strings; branches string (or int) keyed mappings."""
    if not isinstance(tree, dict):
        collect_msg(
            _type_error(path, "an object", tree),
            strict=strict,
            summary=summary,
            is_error=True,
        )
        return

    for key, value in tree.items():
        child = f"{path}.{key}"
        if not isinstance(key, (str, int)) or isinstance(key, bool):
            collect_msg(
                f"`{path}` has a non-string key {key!r}",
                strict=strict,
                summary=summary,
                is_error=True,
            )
            continue
        if isinstance(value, dict):
            _validate_token_tree(value, child, strict=strict, summary=summary)
        elif not isinstance(value, str):
            collect_msg(
                f"theme token `{child}` expected str, got {type(value).__name__}",
                strict=strict,
                summary=summary,
                is_error=True,
            )


def _validate_theme(
    theme: dict[str, Any],
    *,
    strict: bool,
    summary: ValidationSummary,
) -> None:
    for key, value in theme.items():
        if key == "extend":
            _validate_token_tree(value, "theme.extend", strict=strict, summary=summary)
        elif isinstance(value, dict):
            _validate_token_tree(value, f"theme.{key}", strict=strict, summary=summary)
        elif not isinstance(value, str):
            collect_msg(
                _type_error(f"theme.{key}", "an object or str", value),
                strict=strict,
                summary=summary,
                is_error=True,
            )


def validate_config(
    parsed_cfg: Any,
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate a parsed configuration object.

    Type problems are errors. Unknown keys and unrecognized values are
    warnings, escalated to strict warnings when `strict_config` is on
    (the default). `strict` overrides the config's own setting.
    """
    logger = getAppLogger()
    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG,
    )

    if not isinstance(parsed_cfg, dict):
        collect_msg(
            "Top-level configuration must be an object with named keys,"
            f" got {type(parsed_cfg).__name__}",
            strict=True,
            summary=summary,
            is_error=True,
        )
        summary.valid = False
        return summary

    logger.trace(f"[validate_config] Validating root with {len(parsed_cfg)} keys")

    strict_from_root = parsed_cfg.get("strict_config")
    if strict is not None:
        summary.strict = strict
    elif isinstance(strict_from_root, bool):
        summary.strict = strict_from_root
    strict_config = summary.strict

    _check_unknown_keys(parsed_cfg, strict=strict_config, summary=summary)

    for key, types in ROOT_TYPES.items():
        if key not in parsed_cfg:
            continue
        val = parsed_cfg[key]
        if not isinstance(val, types):
            collect_msg(
                _type_error(key, types[0].__name__, val),
                strict=strict_config,
                summary=summary,
                is_error=True,
            )

    content = parsed_cfg.get("content")
    if isinstance(content, list):
        for i, pattern in enumerate(content):
            if not isinstance(pattern, str) or not pattern.strip():
                collect_msg(
                    f"key `content` #{i + 1} expected a non-empty pattern string,"
                    f" got {pattern!r}",
                    strict=strict_config,
                    summary=summary,
                    is_error=True,
                )
    elif "content" not in parsed_cfg:
        collect_msg(
            "No `content` patterns configured; no files will be scanned.",
            strict=False,
            summary=summary,
        )

    theme = parsed_cfg.get("theme")
    if isinstance(theme, dict):
        _validate_theme(theme, strict=strict_config, summary=summary)

    mode = parsed_cfg.get("mode")
    if isinstance(mode, str) and mode not in KNOWN_MODES:
        collect_msg(
            f"Unrecognized mode {mode!r}; it is passed through unchanged.",
            strict=strict_config,
            summary=summary,
        )

    log_level = parsed_cfg.get("log_level")
    if isinstance(log_level, str) and not isinstance(
        logger.resolve_level_name(log_level), int
    ):
        collect_msg(
            f"key `log_level` names an unknown level {log_level!r}"
            f" (e.g. {FIELD_EXAMPLES['log_level']})",
            strict=strict_config,
            summary=summary,
            is_error=True,
        )

    precedence = parsed_cfg.get("precedence")
    valid_precedence = literal_to_set(Precedence)
    if isinstance(precedence, str) and precedence not in valid_precedence:
        collect_msg(
            f"key `precedence` must be one of {sorted(valid_precedence)},"
            f" got {precedence!r}",
            strict=strict_config,
            summary=summary,
            is_error=True,
        )

    summary.valid = not summary.errors and not summary.strict_warnings
    return summary

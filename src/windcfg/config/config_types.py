# src/windcfg/config/config_types.py


from pathlib import Path
from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired


OriginType = Literal["config", "code", "default", "test"]

# Which declaration wins when one config source declares several
# - "first": the first declaration
# - "last": the last declaration (reassignment semantics)
# - "richest": the declaration with the most theme tokens
Precedence = Literal["first", "last", "richest"]


class ThemeConfig(TypedDict, total=False):
    # Any other key replaces the base theme value of the same name wholesale
    extend: dict[str, Any]


class RootConfig(TypedDict, total=False):
    content: list[str]
    theme: ThemeConfig
    mode: str  # pass-through, recognized value "all"
    plugins: list[Any]  # pass-through, not interpreted

    # runtime behavior
    strict_config: bool
    log_level: str
    precedence: Precedence


class ContentEntryResolved(TypedDict):
    pattern: str  # normalized pattern, relative to `root`
    root: Path  # canonical origin directory for resolution
    raw: str  # pattern as written in the config

    # meta only
    origin: OriginType  # provenance


class MetaConfigResolved(TypedDict):
    config_path: Path | None
    config_root: Path


class ThemeConfigResolved(TypedDict):
    overrides: dict[str, Any]  # top-level keys replacing base values
    extend: dict[str, Any]


class RootConfigResolved(TypedDict):
    content: list[ContentEntryResolved]
    theme: ThemeConfigResolved
    mode: str
    plugins: list[Any]

    # runtime behavior
    strict_config: bool
    log_level: str

    # global provenance (optional, for audit/debug)
    __meta__: NotRequired[MetaConfigResolved]

# src/windcfg/config/__init__.py

"""Config file discovery, loading, validation and resolution."""

from .config_loader import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
    select_declaration,
)
from .config_resolve import resolve_config
from .config_types import (
    ContentEntryResolved,
    MetaConfigResolved,
    OriginType,
    Precedence,
    RootConfig,
    RootConfigResolved,
    ThemeConfig,
    ThemeConfigResolved,
)
from .config_validate import ValidationSummary, validate_config


__all__ = [  # noqa: RUF022
    # config_loader
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    "select_declaration",
    # config_resolve
    "resolve_config",
    # config_types
    "ContentEntryResolved",
    "MetaConfigResolved",
    "OriginType",
    "Precedence",
    "RootConfig",
    "RootConfigResolved",
    "ThemeConfig",
    "ThemeConfigResolved",
    # config_validate
    "ValidationSummary",
    "validate_config",
]

# src/windcfg/__init__.py

"""Windcfg: resolve utility-CSS build configuration.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use by build drivers.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - resolve_content()   → Expand content globs into a deduplicated file set
    - merge_theme()       → Deep-merge a theme overlay into a base theme
    - resolve_project()   → Run both for a resolved config
    - resolve_from_path() → Find, load and resolve a config file
"""

from .build import (
    ProjectResolution,
    build_tokens,
    resolve_entries,
    resolve_from_path,
    resolve_project,
)
from .config import (
    ContentEntryResolved,
    Precedence,
    RootConfig,
    RootConfigResolved,
    ValidationSummary,
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
    resolve_config,
    select_declaration,
    validate_config,
)
from .constants import (
    DEFAULT_BASE_THEME,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MODE,
    DEFAULT_PRECEDENCE,
    DEFAULT_STRICT_CONFIG,
)
from .content import ContentResolution, resolve_content, walk_concrete_pattern
from .errors import (
    ConfigError,
    CyclicReferenceError,
    InvalidPatternError,
    ResolutionCancelledError,
    ResolutionWarning,
    WindcfgError,
)
from .logs import getAppLogger
from .meta import PROGRAM_CONFIG, PROGRAM_DISPLAY, PROGRAM_ENV, PROGRAM_PACKAGE
from .patterns import (
    ConcretePattern,
    GlobPattern,
    expand_braces,
    matches_pattern,
    normalize_pattern,
    parse_pattern,
)
from .theme import (
    count_leaves,
    find_key_path,
    flatten_tokens,
    lookup_token,
    merge_theme,
    resolve_references,
    resolve_theme,
)


__all__ = [  # noqa: RUF022
    # build
    "ProjectResolution",
    "build_tokens",
    "resolve_entries",
    "resolve_from_path",
    "resolve_project",
    # config
    "ContentEntryResolved",
    "Precedence",
    "RootConfig",
    "RootConfigResolved",
    "ValidationSummary",
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    "resolve_config",
    "select_declaration",
    "validate_config",
    # constants
    "DEFAULT_BASE_THEME",
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_MODE",
    "DEFAULT_PRECEDENCE",
    "DEFAULT_STRICT_CONFIG",
    # content
    "ContentResolution",
    "resolve_content",
    "walk_concrete_pattern",
    # errors
    "ConfigError",
    "CyclicReferenceError",
    "InvalidPatternError",
    "ResolutionCancelledError",
    "ResolutionWarning",
    "WindcfgError",
    # logs
    "getAppLogger",
    # meta
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    # patterns
    "ConcretePattern",
    "GlobPattern",
    "expand_braces",
    "matches_pattern",
    "normalize_pattern",
    "parse_pattern",
    # theme
    "count_leaves",
    "find_key_path",
    "flatten_tokens",
    "lookup_token",
    "merge_theme",
    "resolve_references",
    "resolve_theme",
]

# src/windcfg/errors.py
"""Error and warning types raised or collected by windcfg.

Structural problems (a malformed pattern, a reference cycle) are raised.
Filesystem trouble on a single subtree is collected as a ResolutionWarning
and returned beside the successful result instead.
"""

from pathlib import Path


class WindcfgError(Exception):
    """Base class for every error raised by windcfg."""


class ConfigError(WindcfgError):
    """A configuration file could not be loaded, parsed or validated."""


class InvalidPatternError(WindcfgError):
    """A content glob pattern is malformed or uses an unsupported token."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid content pattern {pattern!r}: {reason}")


class CyclicReferenceError(WindcfgError):
    """A theme token reference chain loops back on itself."""

    def __init__(self, key_path: str, chain: list[str]) -> None:
        self.key_path = key_path
        self.chain = list(chain)
        joined = " -> ".join([*self.chain, key_path])
        super().__init__(f"Cyclic theme reference at {key_path!r}: {joined}")


class ResolutionCancelledError(WindcfgError):
    """Content resolution was cancelled before it finished."""


class ResolutionWarning(UserWarning):
    """A subtree could not be read during content resolution.

    Instances are collected on the result rather than raised.
    """

    def __init__(self, path: Path | str, error: OSError) -> None:
        self.path = Path(path)
        self.error = error
        reason = error.strerror or type(error).__name__
        super().__init__(f"Skipped unreadable directory {self.path}: {reason}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolutionWarning):
            return NotImplemented
        return self.path == other.path and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((self.path, str(self)))

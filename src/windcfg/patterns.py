# src/windcfg/patterns.py
"""Content glob patterns: parsing, brace expansion and matching.

Supported syntax is intentionally narrow:

  - literal path segments
  - `*` inside a segment (never crosses '/')
  - `**` as a whole segment (zero or more full segments)
  - `{a,b,...}` brace groups, expanded before matching

Anything else that looks like glob syntax (`?`, `[...]`, leading `!`,
nested braces) is rejected with InvalidPatternError.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import product
from pathlib import Path, PurePosixPath

from apathetic_utils import normalize_path_string

from .errors import InvalidPatternError
from .logs import getAppLogger


UNSUPPORTED_TOKENS = {
    "?": "single-character wildcard '?' is not supported",
    "[": "character classes '[...]' are not supported",
    "]": "character classes '[...]' are not supported",
}


@dataclass(frozen=True)
class ConcretePattern:
    """One brace-free pattern, split into a static prefix and a matcher."""

    pattern: str
    prefix: PurePosixPath
    remainder: tuple[str, ...]
    recursive: bool
    source: str = field(compare=False)

    @property
    def max_depth(self) -> int | None:
        """Number of segments below the prefix a match can have, or None."""
        return None if self.recursive else len(self.remainder)

    def matches(self, rel_path: str) -> bool:
        """Return True if `rel_path` (relative to the prefix, '/'-separated)
        matches this pattern's remainder."""
        return _compile_remainder(self.remainder).fullmatch(rel_path) is not None


@dataclass(frozen=True)
class GlobPattern:
    raw: str
    normalized: str
    concrete: tuple[ConcretePattern, ...]


# --------------------------------------------------------------------------- #
# brace expansion
# --------------------------------------------------------------------------- #


def _split_brace_groups(pattern: str, raw: str) -> list[list[str]]:
    """Split a pattern into literal chunks and brace alternatives.

    Returns a list where every item is a list of alternatives; literal chunks
    are single-item lists. Raises InvalidPatternError on malformed braces.
    """
    parts: list[list[str]] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "}":
            raise InvalidPatternError(raw, f"unbalanced '}}' at position {i}")
        if ch != "{":
            literal.append(ch)
            i += 1
            continue

        close = pattern.find("}", i + 1)
        if close == -1:
            raise InvalidPatternError(raw, f"unbalanced '{{' at position {i}")
        body = pattern[i + 1 : close]
        if "{" in body:
            raise InvalidPatternError(raw, "nested brace groups are not supported")
        alternatives = body.split(",")
        if not body or any(not alt for alt in alternatives):
            raise InvalidPatternError(raw, "empty alternative in brace group")

        parts.append(["".join(literal)])
        literal = []
        parts.append(alternatives)
        i = close + 1

    parts.append(["".join(literal)])
    return parts


def expand_braces(pattern: str) -> list[str]:
    """Expand every `{a,b}` group in `pattern`, in order, without duplicates.

    Multiple groups expand as a cartesian product:
        "src/{a,b}/*.{x,y}" -> 4 patterns
    """
    parts = _split_brace_groups(pattern, pattern)
    expanded: list[str] = []
    for combo in product(*parts):
        candidate = "".join(combo)
        if candidate not in expanded:
            expanded.append(candidate)
    return expanded


# --------------------------------------------------------------------------- #
# matching
# --------------------------------------------------------------------------- #


def _has_wildcard(segment: str) -> bool:
    return "*" in segment


def _translate_segment(segment: str) -> str:
    pieces: list[str] = []
    for ch in segment:
        if ch == "*":
            pieces.append("[^/]*")
        else:
            pieces.append(re.escape(ch))
    return "".join(pieces)


@lru_cache(maxsize=512)
def _compile_remainder(remainder: tuple[str, ...]) -> re.Pattern[str]:
    """Compile the wildcard part of a pattern into an anchored regex.

    `**` in the middle matches zero or more whole segments, a trailing `**`
    matches one or more. Always case-sensitive.
    """
    pieces: list[str] = []
    last = len(remainder) - 1
    for idx, segment in enumerate(remainder):
        if segment == "**":
            pieces.append("[^/]+(?:/[^/]+)*" if idx == last else "(?:[^/]+/)*")
            continue
        pieces.append(_translate_segment(segment))
        if idx != last:
            pieces.append("/")
    return re.compile("".join(pieces))


# --------------------------------------------------------------------------- #
# parsing
# --------------------------------------------------------------------------- #


def normalize_pattern(raw: str) -> str:
    """Normalize a pattern string and drop its '.' segments.

        "./src\\ui//./*.rs" -> "src/ui/*.rs"

    '..' is kept so parse_pattern() can reject it.
    """
    text = normalize_path_string(raw)
    if not text:
        return ""
    leading = "/" if text.startswith("/") else ""
    body = "/".join(s for s in text.split("/") if s not in ("", "."))
    return leading + body


def _relativize(normalized: str, raw: str, root: Path | None) -> str:
    if not normalized.startswith("/"):
        return normalized
    if root is None:
        raise InvalidPatternError(raw, "absolute pattern given without a root")
    root_str = str(root.resolve()).replace("\\", "/").rstrip("/")
    if normalized == root_str or not normalized.startswith(root_str + "/"):
        raise InvalidPatternError(raw, f"absolute pattern is outside root {root_str}")
    return normalized[len(root_str) + 1 :]


def _check_segments(segments: list[str], raw: str) -> None:
    for segment in segments:
        if segment == "..":
            raise InvalidPatternError(raw, "'..' segments would escape the root")
        if "**" in segment and segment != "**":
            raise InvalidPatternError(
                raw, f"'**' must be a whole path segment, got {segment!r}"
            )
        if segment.startswith("!"):
            raise InvalidPatternError(raw, "negated patterns are not supported")
        for token, reason in UNSUPPORTED_TOKENS.items():
            if token in segment:
                raise InvalidPatternError(raw, reason)


def _make_concrete(pattern: str, raw: str) -> ConcretePattern:
    segments = [s for s in pattern.split("/") if s not in ("", ".")]
    if not segments:
        raise InvalidPatternError(raw, "pattern does not name any file")
    _check_segments(segments, raw)

    # A pattern without wildcards names a single file: its parent is the prefix
    split_at = next(
        (i for i, seg in enumerate(segments) if _has_wildcard(seg)),
        len(segments) - 1,
    )
    prefix = PurePosixPath(*segments[:split_at]) if split_at else PurePosixPath()
    remainder = tuple(segments[split_at:])
    return ConcretePattern(
        pattern="/".join(segments),
        prefix=prefix,
        remainder=remainder,
        recursive="**" in remainder,
        source=raw,
    )


def parse_pattern(raw: str, root: Path | None = None) -> GlobPattern:
    """Parse a content pattern into its brace-expanded concrete patterns.

    Raises:
        InvalidPatternError: malformed braces, unsupported tokens, or a
            pattern that points outside `root`.
    """
    logger = getAppLogger()
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidPatternError(str(raw), "pattern must be a non-empty string")

    normalized = normalize_pattern(raw)
    relative = _relativize(normalized, raw, root)
    expanded = _split_brace_groups(relative, raw)

    concrete: list[ConcretePattern] = []
    seen: set[str] = set()
    for combo in product(*expanded):
        item = _make_concrete("".join(combo), raw)
        if item.pattern in seen:
            continue
        seen.add(item.pattern)
        concrete.append(item)

    logger.trace(
        f"[PATTERN] {raw!r} → {len(concrete)} concrete:"
        f" {[c.pattern for c in concrete]}"
    )
    return GlobPattern(raw=raw, normalized=relative, concrete=tuple(concrete))


def matches_pattern(rel_path: str, pattern: GlobPattern | str) -> bool:
    """Return True if a root-relative path matches any concrete pattern.

    Mostly useful for diagnostics: the resolver walks the filesystem
    rather than testing every path.
    """
    parsed = pattern if isinstance(pattern, GlobPattern) else parse_pattern(pattern)
    path = normalize_pattern(rel_path)
    for concrete in parsed.concrete:
        prefix = str(concrete.prefix)
        if prefix in ("", "."):
            rest = path
        elif path.startswith(prefix + "/"):
            rest = path[len(prefix) + 1 :]
        else:
            continue
        if concrete.matches(rest):
            return True
    return False

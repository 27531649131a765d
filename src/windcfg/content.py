# src/windcfg/content.py
"""Content path resolution: turn content patterns into a concrete file set."""

import os
import threading
from collections.abc import Iterable, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path

from apathetic_utils import plural

from .constants import DEFAULT_MAX_WORKERS
from .errors import InvalidPatternError, ResolutionCancelledError, ResolutionWarning
from .logs import getAppLogger
from .patterns import ConcretePattern, GlobPattern, parse_pattern


@dataclass
class ContentResolution:
    """Result of resolving a list of content patterns against a root."""

    root: Path
    files: frozenset[Path] = frozenset()
    warnings: list[ResolutionWarning] = field(default_factory=list)
    errors: list[InvalidPatternError] = field(default_factory=list)

    def sorted_files(self) -> list[Path]:
        return sorted(self.files)

    def relative_files(self) -> set[str]:
        """Files as '/'-separated paths relative to the root."""
        return {p.relative_to(self.root).as_posix() for p in self.files}


# --------------------------------------------------------------------------- #
# walking
# --------------------------------------------------------------------------- #


def _check_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        xmsg = "Content resolution was cancelled"
        raise ResolutionCancelledError(xmsg)


def walk_concrete_pattern(
    concrete: ConcretePattern,
    root: Path,
    *,
    cancel_event: threading.Event | None = None,
) -> tuple[list[Path], list[ResolutionWarning]]:
    """Walk the subtree under a pattern's static prefix and collect matches.

    `root` must already be resolved. A missing prefix directory yields no
    matches. Unreadable subdirectories are skipped and reported as warnings.
    """
    logger = getAppLogger()
    base = root / concrete.prefix
    matches: list[Path] = []
    warnings: list[ResolutionWarning] = []

    if not base.is_dir():
        logger.trace(f"[WALK] prefix does not exist: {base}")
        return matches, warnings

    def _on_error(error: OSError) -> None:
        if isinstance(error, (FileNotFoundError, NotADirectoryError)):
            # vanished between listing and reading
            return
        warning = ResolutionWarning(error.filename or base, error)
        logger.warning("%s", warning)
        warnings.append(warning)

    max_depth = concrete.max_depth
    base_str = str(base)
    for dirpath, dirnames, filenames in os.walk(base_str, onerror=_on_error):
        _check_cancelled(cancel_event)

        rel_dir = os.path.relpath(dirpath, base_str)
        depth = 0 if rel_dir == "." else rel_dir.count(os.sep) + 1

        if max_depth is not None and depth + 1 >= max_depth:
            # nothing deeper can match a bounded pattern
            dirnames.clear()
        if max_depth is not None and depth + 1 != max_depth:
            continue

        rel_prefix = "" if rel_dir == "." else rel_dir.replace(os.sep, "/") + "/"
        for name in filenames:
            if not concrete.matches(rel_prefix + name):
                continue
            full = os.path.join(dirpath, name)
            if os.path.isfile(full):
                matches.append(Path(os.path.normpath(full)))

    logger.trace(
        f"[WALK] {concrete.pattern!r} matched {len(matches)} file{plural(matches)}"
    )
    return matches, warnings


# --------------------------------------------------------------------------- #
# resolution
# --------------------------------------------------------------------------- #


def parse_content_patterns(
    patterns: Iterable[str | GlobPattern],
    root: Path,
    *,
    strict: bool = True,
) -> tuple[list[GlobPattern], list[InvalidPatternError]]:
    """Parse every pattern, collecting errors (or raising the first in strict)."""
    parsed: list[GlobPattern] = []
    errors: list[InvalidPatternError] = []
    for pattern in patterns:
        if isinstance(pattern, GlobPattern):
            parsed.append(pattern)
            continue
        try:
            parsed.append(parse_pattern(pattern, root))
        except InvalidPatternError as e:
            if strict:
                raise
            errors.append(e)
    return parsed, errors


def _unique_concrete(parsed: Sequence[GlobPattern]) -> list[ConcretePattern]:
    unique: list[ConcretePattern] = []
    seen: set[tuple[str, ...]] = set()
    for glob in parsed:
        for concrete in glob.concrete:
            key = (str(concrete.prefix), *concrete.remainder)
            if key in seen:
                continue
            seen.add(key)
            unique.append(concrete)
    return unique


def resolve_content(
    patterns: Iterable[str | GlobPattern],
    root: Path | str,
    *,
    strict: bool = True,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> ContentResolution:
    """Resolve content patterns into a deduplicated set of absolute file paths.

    Args:
        patterns: Content patterns, e.g. "./src/**/*.{rs,html}".
        root: Directory the patterns are relative to.
        strict: Raise the first InvalidPatternError instead of skipping the
            offending pattern and recording it on the result.
        max_workers: Thread count for walking patterns in parallel.
            1 walks sequentially in the calling thread.
        cancel_event: When set, resolution stops and raises
            ResolutionCancelledError; no partial result is returned.

    Returns:
        ContentResolution with the files, any access warnings and (when not
        strict) the pattern errors.
    """
    logger = getAppLogger()
    root_path = Path(root).resolve()
    parsed, errors = parse_content_patterns(patterns, root_path, strict=strict)
    concrete = _unique_concrete(parsed)

    logger.debug(
        "Resolving %d content pattern%s (%d concrete) under %s",
        len(parsed),
        plural(parsed),
        len(concrete),
        root_path,
    )
    _check_cancelled(cancel_event)

    files: set[Path] = set()
    warnings: list[ResolutionWarning] = []

    workers = max_workers if max_workers is not None else DEFAULT_MAX_WORKERS
    if workers <= 1 or len(concrete) <= 1:
        for item in concrete:
            matches, item_warnings = walk_concrete_pattern(
                item, root_path, cancel_event=cancel_event
            )
            files.update(matches)
            warnings.extend(item_warnings)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    walk_concrete_pattern, item, root_path, cancel_event=cancel_event
                )
                for item in concrete
            ]
            _done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            # single collector: only this thread touches `files`
            for future in futures:
                if future.cancelled():
                    continue
                matches, item_warnings = future.result()
                files.update(matches)
                warnings.extend(item_warnings)

    _check_cancelled(cancel_event)

    # the same directory can be reported by several patterns
    unique_warnings = list(dict.fromkeys(warnings))
    logger.debug(
        "Resolved %d file%s (%d warning%s, %d invalid pattern%s)",
        len(files),
        plural(files),
        len(unique_warnings),
        plural(unique_warnings),
        len(errors),
        plural(errors),
    )
    return ContentResolution(
        root=root_path,
        files=frozenset(files),
        warnings=unique_warnings,
        errors=errors,
    )

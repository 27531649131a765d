# tests/0_independent/test_priv__compile_remainder.py
r"""Tests for windcfg.patterns._compile_remainder() regex generator.

_compile_remainder() compiles the wildcard part of a concrete pattern (the
segments after its static prefix) into an anchored, case-sensitive regex.

Test Coverage:
- single_star: * matches within one segment
- middle_double_star: ** in the middle matches zero or more segments
- trailing_double_star: a trailing ** matches one or more segments
- literals_escaped: regex metacharacters in names are literal
- caching_behavior: results are cached per remainder tuple
"""

# We import `_` private for testing purposes only
# ruff: noqa: SLF001
# pyright: reportPrivateUsage=false

import windcfg.patterns as mod_patterns


def _matches(remainder: tuple[str, ...], path: str) -> bool:
    return mod_patterns._compile_remainder(remainder).fullmatch(path) is not None


def test_single_star_stays_in_segment() -> None:
    assert _matches(("*.rs",), "main.rs")
    assert _matches(("*.rs",), ".rs")
    assert not _matches(("*.rs",), "src/main.rs")


def test_middle_double_star_matches_zero_or_more_segments() -> None:
    remainder = ("**", "*.rs")
    assert _matches(remainder, "a.rs")
    assert _matches(remainder, "x/a.rs")
    assert _matches(remainder, "x/y/z/a.rs")
    assert not _matches(remainder, "x/a.html")


def test_double_star_between_literals() -> None:
    remainder = ("src", "**", "mod.rs")
    assert _matches(remainder, "src/mod.rs")
    assert _matches(remainder, "src/a/b/mod.rs")
    assert not _matches(remainder, "lib/mod.rs")


def test_trailing_double_star_needs_a_segment() -> None:
    assert _matches(("**",), "a")
    assert _matches(("**",), "a/b/c")
    assert not _matches(("**",), "")


def test_literals_are_escaped() -> None:
    assert _matches(("a+b.(rs)",), "a+b.(rs)")
    assert not _matches(("a.rs",), "aXrs")


def test_compiled_patterns_are_cached() -> None:
    first = mod_patterns._compile_remainder(("**", "*.css"))
    second = mod_patterns._compile_remainder(("**", "*.css"))
    assert first is second

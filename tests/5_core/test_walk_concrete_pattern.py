# tests/5_core/test_walk_concrete_pattern.py
"""Tests for walking a single concrete pattern under its static prefix."""

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

import windcfg.content as mod_content
import windcfg.patterns as mod_patterns
from tests.utils import make_tree, rel_set


def _concrete(pattern: str) -> mod_patterns.ConcretePattern:
    (concrete,) = mod_patterns.parse_pattern(pattern).concrete
    return concrete


def test_walk_recursive_pattern_reaches_every_depth(tmp_path: Path) -> None:
    # --- setup ---
    make_tree(tmp_path, ["src/a.rs", "src/x/b.rs", "src/x/y/z/c.rs", "other/d.rs"])

    # --- execute ---
    matches, warnings = mod_content.walk_concrete_pattern(
        _concrete("src/**/*.rs"), tmp_path.resolve()
    )

    # --- verify ---
    assert rel_set(set(matches), tmp_path) == {
        "src/a.rs",
        "src/x/b.rs",
        "src/x/y/z/c.rs",
    }
    assert warnings == []


def test_walk_bounded_pattern_does_not_descend_past_literal_depth(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    make_tree(tmp_path, ["src/a.rs", "src/x/b.rs", "src/x/y/c.rs"])
    visited: list[str] = []
    real_walk = os.walk

    def _recording_walk(top: str, **kwargs: Any) -> Iterator[Any]:
        for dirpath, dirnames, filenames in real_walk(top, **kwargs):
            visited.append(os.path.relpath(dirpath, top))
            yield dirpath, dirnames, filenames

    monkeypatch.setattr(mod_content.os, "walk", _recording_walk)

    # --- execute ---
    matches, _warnings = mod_content.walk_concrete_pattern(
        _concrete("src/*.rs"), tmp_path.resolve()
    )

    # --- verify ---
    assert rel_set(set(matches), tmp_path) == {"src/a.rs"}
    assert visited == ["."]


def test_walk_skips_directories_named_like_files(tmp_path: Path) -> None:
    # --- setup ---
    make_tree(tmp_path, ["src/a.rs", "src/fake.rs/inner.txt"])

    # --- execute ---
    matches, _warnings = mod_content.walk_concrete_pattern(
        _concrete("src/**/*.rs"), tmp_path.resolve()
    )

    # --- verify ---
    assert rel_set(set(matches), tmp_path) == {"src/a.rs"}


def test_walk_missing_prefix_returns_nothing(tmp_path: Path) -> None:
    # --- execute ---
    matches, warnings = mod_content.walk_concrete_pattern(
        _concrete("missing/**/*.rs"), tmp_path.resolve()
    )

    # --- verify ---
    assert matches == []
    assert warnings == []


def test_walk_literal_file_pattern(tmp_path: Path) -> None:
    # --- setup ---
    make_tree(tmp_path, ["src/main.rs", "src/lib.rs", "src/nested/main.rs"])

    # --- execute ---
    matches, _warnings = mod_content.walk_concrete_pattern(
        _concrete("./src/main.rs"), tmp_path.resolve()
    )

    # --- verify ---
    assert rel_set(set(matches), tmp_path) == {"src/main.rs"}

# tests/5_core/test_merge_theme.py
"""Tests for merge_theme() deep-merge semantics.

Checklist:
- precedence: an extend leaf replaces the base leaf
- additivity: new families are added beside existing ones
- recursive: sibling shades survive when a new shade is added
- shape_mismatch: extend's shape wins when a leaf meets a mapping
- base_only: keys only in base are carried through
- no_mutation: neither input is modified
- key_normalization: 500 and "500" address the same token
"""

from copy import deepcopy

import windcfg.theme as mod_theme


def test_merge_theme_extend_leaf_wins() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"black": "x"}},
        {"colors": {"black": "y"}},
    )

    # --- verify ---
    assert result == {"colors": {"black": "y"}}


def test_merge_theme_adds_new_entries() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"black": "x"}},
        {"colors": {"green": {"500": "y"}}},
    )

    # --- verify ---
    assert result == {"colors": {"black": "x", "green": {"500": "y"}}}


def test_merge_theme_merges_nested_mappings_recursively() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"indigo": {"400": "a", "500": "b"}}},
        {"colors": {"indigo": {"600": "c"}}},
    )

    # --- verify ---
    assert result == {"colors": {"indigo": {"400": "a", "500": "b", "600": "c"}}}


def test_merge_theme_leaf_replaces_mapping() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"indigo": {"400": "a", "500": "b"}}},
        {"colors": {"indigo": "var(--color-indigo)"}},
    )

    # --- verify ---
    assert result == {"colors": {"indigo": "var(--color-indigo)"}}


def test_merge_theme_mapping_replaces_leaf() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"indigo": "var(--color-indigo)"}},
        {"colors": {"indigo": {"500": "b"}}},
    )

    # --- verify ---
    assert result == {"colors": {"indigo": {"500": "b"}}}


def test_merge_theme_carries_base_only_keys() -> None:
    # --- setup ---
    base = {
        "colors": {"black": "#000"},
        "spacing": {"1": "0.25rem", "2": "0.5rem"},
    }

    # --- execute ---
    result = mod_theme.merge_theme(base, {"colors": {"white": "#fff"}})

    # --- verify ---
    assert result["spacing"] == {"1": "0.25rem", "2": "0.5rem"}
    assert result["colors"] == {"black": "#000", "white": "#fff"}


def test_merge_theme_does_not_mutate_inputs() -> None:
    # --- setup ---
    base = {"colors": {"indigo": {"400": "a"}}}
    extend = {"colors": {"indigo": {"500": "b"}}}
    base_before = deepcopy(base)
    extend_before = deepcopy(extend)

    # --- execute ---
    result = mod_theme.merge_theme(base, extend)
    result["colors"]["indigo"]["400"] = "changed"
    result["colors"]["indigo"]["500"] = "changed"

    # --- verify ---
    assert base == base_before
    assert extend == extend_before


def test_merge_theme_normalizes_numeric_keys() -> None:
    # --- execute ---
    result = mod_theme.merge_theme(
        {"colors": {"indigo": {500: "a"}}},
        {"colors": {"indigo": {"500": "b", 600: "c"}}},
    )

    # --- verify ---
    assert result == {"colors": {"indigo": {"500": "b", "600": "c"}}}


def test_merge_theme_empty_sides() -> None:
    # --- execute + verify ---
    assert mod_theme.merge_theme({}, {}) == {}
    assert mod_theme.merge_theme({"a": "x"}, {}) == {"a": "x"}
    assert mod_theme.merge_theme({}, {"a": {"b": "y"}}) == {"a": {"b": "y"}}

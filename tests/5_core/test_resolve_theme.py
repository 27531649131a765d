# tests/5_core/test_resolve_theme.py
"""Tests for resolve_theme(): wholesale overrides, then extend."""

import windcfg.constants as mod_constants
import windcfg.theme as mod_theme


BASE = {
    "colors": {"black": "#000", "white": "#fff"},
    "spacing": {"1": "0.25rem"},
}


def test_resolve_theme_without_config_returns_base_copy() -> None:
    # --- execute ---
    result = mod_theme.resolve_theme(BASE, None)

    # --- verify ---
    assert result == BASE
    assert result is not BASE
    assert result["colors"] is not BASE["colors"]


def test_resolve_theme_extend_only() -> None:
    # --- execute ---
    result = mod_theme.resolve_theme(
        BASE, {"extend": {"colors": {"black": "var(--color-black)"}}}
    )

    # --- verify ---
    assert result == {
        "colors": {"black": "var(--color-black)", "white": "#fff"},
        "spacing": {"1": "0.25rem"},
    }


def test_resolve_theme_top_level_key_replaces_wholesale() -> None:
    # --- execute ---
    result = mod_theme.resolve_theme(BASE, {"colors": {"brand": "#123"}})

    # --- verify ---
    assert result["colors"] == {"brand": "#123"}
    assert result["spacing"] == {"1": "0.25rem"}


def test_resolve_theme_extend_applies_after_overrides() -> None:
    # --- execute ---
    result = mod_theme.resolve_theme(
        BASE,
        {
            "colors": {"brand": "#123"},
            "extend": {"colors": {"accent": "#456"}},
        },
    )

    # --- verify ---
    assert result["colors"] == {"brand": "#123", "accent": "#456"}


def test_resolve_theme_empty_extend_keeps_default_base() -> None:
    # --- execute ---
    result = mod_theme.resolve_theme(mod_constants.DEFAULT_BASE_THEME, {"extend": {}})

    # --- verify ---
    assert result == mod_constants.DEFAULT_BASE_THEME

# src/windcfg/theme.py
"""Theme token merging.

A theme is a tree of string-keyed mappings with string leaves::

    {"colors": {"black": "var(--color-black)", "indigo": {"500": "..."}}}

`merge_theme()` deep-merges a user overlay into a base theme,
`resolve_theme()` applies a full `theme` config (wholesale overrides plus
`extend`), `resolve_references()` expands `theme(path.to.token)` aliases and
`flatten_tokens()` produces the dotted token table handed to generators.
"""

import re
from collections.abc import Iterator, Mapping
from copy import deepcopy
from typing import Any

from .constants import DEFAULT_TOKEN_KEY
from .errors import CyclicReferenceError
from .logs import getAppLogger


ThemeTree = dict[str, Any]

EXTEND_KEY = "extend"

# theme(colors.indigo.500), theme('colors.indigo.500'), theme("...")
REFERENCE_RE = re.compile(r"""theme\(\s*(['"]?)([^'"()\s]+)\1\s*\)""")


def _is_branch(value: Any) -> bool:
    return isinstance(value, Mapping)


def _copy_tree(value: Any) -> Any:
    """Deep copy a subtree, normalizing keys to strings."""
    if _is_branch(value):
        return {str(k): _copy_tree(v) for k, v in value.items()}
    return deepcopy(value)


def merge_theme(base: Mapping[Any, Any], extend: Mapping[Any, Any]) -> ThemeTree:
    """Deep-merge `extend` into `base` and return a new tree.

    - keys only in one side are copied as-is
    - two mappings under the same key merge recursively
    - otherwise the `extend` value wins, whatever its shape

    Keys are normalized to strings, so a Python config's `500` and a JSON
    config's `"500"` address the same token. Neither input is mutated.
    """
    result: ThemeTree = _copy_tree(base)
    for raw_key, ext_value in extend.items():
        key = str(raw_key)
        base_value = result.get(key)
        if _is_branch(base_value) and _is_branch(ext_value):
            result[key] = merge_theme(base_value, ext_value)
        else:
            result[key] = _copy_tree(ext_value)
    return result


def resolve_theme(
    base: Mapping[Any, Any],
    theme_config: Mapping[Any, Any] | None,
) -> ThemeTree:
    """Apply a user `theme` config to a base theme.

    Top-level keys other than `extend` replace the base value for that key
    wholesale (e.g. `theme.colors` drops every built-in color), then
    `theme.extend` is deep-merged on top of the result.
    """
    logger = getAppLogger()
    result: ThemeTree = _copy_tree(base)
    if not theme_config:
        return result

    for raw_key, value in theme_config.items():
        key = str(raw_key)
        if key == EXTEND_KEY:
            continue
        logger.trace(f"[MERGE] theme.{key} replaces the base value")
        result[key] = _copy_tree(value)

    extend = theme_config.get(EXTEND_KEY) or {}
    if extend:
        logger.trace(f"[MERGE] extending {sorted(str(k) for k in extend)}")
        result = merge_theme(result, extend)
    return result


KeyPath = tuple[str, ...]


def _dotted(key_path: KeyPath) -> str:
    return ".".join(key_path)


def find_key_path(tree: Mapping[Any, Any], dotted: str) -> KeyPath:
    """Map a dotted reference onto the tree's real keys, or raise KeyError.

    Keys may contain dots themselves (`spacing` → `"0.5"`), so at each level
    the longest key matching the remaining text is tried first.
    """

    def _descend(node: Any, rest: str) -> KeyPath | None:
        if not _is_branch(node):
            return None
        keys = {str(k): v for k, v in node.items()}
        candidates = [k for k in keys if rest == k or rest.startswith(f"{k}.")]
        for key in sorted(candidates, key=len, reverse=True):
            if rest == key:
                return (key,)
            below = _descend(keys[key], rest[len(key) + 1 :])
            if below is not None:
                return (key, *below)
        return None

    found = _descend(tree, dotted) if dotted else None
    if found is None:
        raise KeyError(dotted)
    return found


def lookup_token(tree: Mapping[Any, Any], key_path: str | KeyPath) -> Any:
    """Return the value at a dotted key path (or a key tuple), or raise KeyError."""
    parts = find_key_path(tree, key_path) if isinstance(key_path, str) else key_path
    node: Any = tree
    for part in parts:
        keys = {str(k): v for k, v in node.items()} if _is_branch(node) else {}
        if part not in keys:
            raise KeyError(_dotted(parts))
        node = keys[part]
    return node


def count_leaves(tree: Any) -> int:
    if not _is_branch(tree):
        return 1
    return sum(count_leaves(v) for v in tree.values())


def _iter_leaves(
    tree: Mapping[str, Any],
    prefix: KeyPath = (),
) -> Iterator[tuple[KeyPath, Any]]:
    for key, value in tree.items():
        path = (*prefix, str(key))
        if _is_branch(value):
            yield from _iter_leaves(value, path)
        else:
            yield path, value


class _ReferenceResolver:
    """Resolve `theme(...)` references leaf by leaf, memoizing results."""

    def __init__(self, tree: Mapping[str, Any]) -> None:
        self.tree = tree
        self.resolved: dict[KeyPath, Any] = {}

    def resolve(self, key_path: KeyPath, chain: list[KeyPath]) -> Any:
        if key_path in self.resolved:
            return self.resolved[key_path]
        if key_path in chain:
            cycle = chain[chain.index(key_path) :]
            raise CyclicReferenceError(
                _dotted(key_path), [_dotted(p) for p in cycle]
            )

        value = lookup_token(self.tree, key_path)
        if isinstance(value, str):
            value = self._substitute(key_path, value, [*chain, key_path])
        self.resolved[key_path] = value
        return value

    def _substitute(self, key_path: KeyPath, value: str, chain: list[KeyPath]) -> str:
        logger = getAppLogger()

        def _replace(match: re.Match[str]) -> str:
            target = match.group(2)
            try:
                target_path = find_key_path(self.tree, target)
            except KeyError:
                logger.warning(
                    "Theme token %s references unknown token %r; left as-is",
                    _dotted(key_path),
                    target,
                )
                return match.group(0)
            if not isinstance(lookup_token(self.tree, target_path), str):
                logger.warning(
                    "Theme token %s references %r, which is not a single value;"
                    " left as-is",
                    _dotted(key_path),
                    target,
                )
                return match.group(0)
            return str(self.resolve(target_path, chain))

        return REFERENCE_RE.sub(_replace, value)


def resolve_references(tree: Mapping[str, Any]) -> ThemeTree:
    """Return a copy of `tree` with every `theme(path)` reference expanded.

    References may chain (a → b → c). References to unknown tokens or to
    whole subtrees are left verbatim. Keys containing dots (`"0.5"`) can be
    both referenced and hold references.

    Raises:
        CyclicReferenceError: a reference chain loops back on itself; the
            error carries the key path and the chain that led to it.
    """
    resolver = _ReferenceResolver(tree)

    def _walk(node: Mapping[str, Any], prefix: KeyPath) -> ThemeTree:
        out: ThemeTree = {}
        for key, value in node.items():
            path = (*prefix, str(key))
            if _is_branch(value):
                out[str(key)] = _walk(value, path)
            elif isinstance(value, str) and REFERENCE_RE.search(value):
                out[str(key)] = resolver.resolve(path, [])
            else:
                out[str(key)] = deepcopy(value)
        return out

    return _walk(tree, ())


def flatten_tokens(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a theme tree into `{"colors.indigo.500": value}`.

    A `DEFAULT` key stands for its parent path:
    `colors.indigo.DEFAULT` is emitted as `colors.indigo`.
    """
    flat: dict[str, Any] = {}
    for key_path, value in _iter_leaves(tree):
        is_default = len(key_path) > 1 and key_path[-1] == DEFAULT_TOKEN_KEY
        flat[_dotted(key_path[:-1] if is_default else key_path)] = value
    return flat

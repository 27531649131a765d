# tests/0_tooling/test_lint__no_from_app_imports.py
"""Custom lint rule: Enforce `import <mod> as mod_<mod>` pattern in tests.

This test acts as a "poor person's linter" since we can't create custom ruff rules
yet. It enforces that ALL test files use `import windcfg.module as mod_module`
instead of `from windcfg.module import ...` when importing from our project.

Tests patch module attributes (see patch_everywhere and the module_logger
fixture); a name pulled in with `from ... import` is no longer looked up on
its module and silently escapes the patch.

For private functions, import the module and access the function via the
module object: `mod_patterns._compile_remainder()`.
"""

import ast
from pathlib import Path

import windcfg.meta as mod_meta


def test_no_app_from_imports() -> None:
    # --- setup ---
    tests_dir = Path(__file__).parents[1]  # tests/ directory (not project root)
    package = mod_meta.PROGRAM_PACKAGE
    bad_files: list[Path] = []

    # --- execute ---
    for path in tests_dir.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if (
                isinstance(node, ast.ImportFrom)
                and node.module
                and (node.module == package or node.module.startswith(package + "."))
            ):
                bad_files.append(path)
                break  # only need one hit per file

    # --- verify ---
    if bad_files:
        listing = "\n".join(f"  - {p.relative_to(tests_dir)}" for p in bad_files)
        xmsg = (
            f"{len(bad_files)} test file(s) use disallowed `from {package}.*`"
            f" imports:\n{listing}\n"
            f"Use `import {package}.<module> as mod_<module>` instead."
        )
        raise AssertionError(xmsg)

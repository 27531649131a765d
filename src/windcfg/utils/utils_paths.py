# src/windcfg/utils/utils_paths.py


from pathlib import Path


def shorten_path_for_display(
    path: Path | str,
    *,
    cwd: Path | None = None,
    root: Path | None = None,
) -> str:
    """Render `path` relative to cwd or root, whichever is shorter.

    Falls back to the absolute path when it lies under neither.
    """
    target = Path(path).resolve()
    relative: list[str] = []
    for base in (b for b in (cwd, root) if b):
        if target.is_relative_to(Path(base).resolve()):
            relative.append(str(target.relative_to(Path(base).resolve())))
    if not relative:
        return str(target)
    return min(relative, key=len) or "."

"""File discovery — resource JSON files and source files to scan for usages."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

# Default exclusion names (any path segment, relative to the scan root).
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".github",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "dist",
        "build",
        "bin",
        "obj",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
    }
)

# Files the tool writes itself; never treat them as resources.
_OUTPUT_FILES = frozenset({"check_result.json"})


def _excluded(path: Path, root: Path, skip: frozenset[str]) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        return True
    return any(part in skip for part in parts[:-1])


def discover_resource_files(
    root: Path,
    patterns: Iterable[str] = ("**/*.json",),
    *,
    exclude: Iterable[str] | None = None,
) -> list[Path]:
    """Find JSON resource files under *root* matching any glob in *patterns*.

    Only ``.json`` files qualify regardless of pattern.  Returns a sorted
    list of absolute paths.
    """
    root = root.resolve()
    skip = _DEFAULT_EXCLUDES | frozenset(exclude or ())
    results: set[Path] = set()
    for pat in patterns:
        for p in root.glob(pat):
            if p.suffix.lower() != ".json" or p.name in _OUTPUT_FILES:
                continue
            if _excluded(p, root, skip):
                continue
            if p.is_file():
                results.add(p.resolve())
    return sorted(results)


def discover_source_files(
    root: Path,
    extensions: Iterable[str] = (".py",),
    *,
    exclude: Iterable[str] | None = None,
    max_file_bytes: int = 2_000_000,
) -> list[Path]:
    """Recursively find source files with one of *extensions* under *root*."""
    root = root.resolve()
    if root.is_file():
        return [root] if root.suffix.lower() in set(extensions) else []
    skip = _DEFAULT_EXCLUDES | frozenset(exclude or ())
    exts = {e.lower() for e in extensions}
    results: list[Path] = []
    for p in root.rglob("*"):
        try:
            if p.is_symlink() or not p.is_file():
                continue
            if p.suffix.lower() not in exts:
                continue
            if _excluded(p, root, skip):
                continue
            if p.stat().st_size > max_file_bytes:
                continue
        except OSError:
            continue
        results.append(p.resolve())
    return sorted(results)

"""Project file discovery.

Walks a project tree depth-first and returns the source files every detector
consumes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EXCLUDE_DIRS = frozenset({
    "node_modules", ".git", "dist", "build", ".next", ".github",
    "cache", ".cache", "out", "__pycache__", "venv", ".venv", "env",
})

INCLUDE_EXTENSIONS = (
    ".ts", ".tsx", ".js", ".jsx", ".py",
    ".css", ".scss", ".less", ".html", ".module.css",
)


# ---------------------------------------------------------------------------
# File collection
# ---------------------------------------------------------------------------

def _normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    if isinstance(extensions, str):
        extensions = (extensions,)
    normalized: list[str] = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.append(ext)
    return tuple(normalized)


def should_include_file(name: str, extensions: Iterable[str] = INCLUDE_EXTENSIONS) -> bool:
    """Check a file name against the extension allow-list."""
    return name.lower().endswith(tuple(extensions))


def collect_files(
    project_path: Path,
    extra_exclude_dirs: Optional[Iterable[str]] = None,
    extra_extensions: Optional[Iterable[str]] = None,
) -> list[Path]:
    """Collect source files under ``project_path`` in depth-first pre-order.

    Entries are visited in the order the filesystem lists them, recursing into
    each directory before moving on to its next sibling. Entries that cannot be
    listed or stat'ed are skipped.
    """
    if isinstance(extra_exclude_dirs, str):
        extra_exclude_dirs = (extra_exclude_dirs,)
    excludes = EXCLUDE_DIRS | set(extra_exclude_dirs or ())
    extensions = INCLUDE_EXTENSIONS + _normalize_extensions(extra_extensions or ())
    files: list[Path] = []
    visited: set[tuple[int, int]] = set()

    def _walk(path: Path) -> None:
        try:
            st = path.stat()
            entries = list(os.scandir(path))
        except OSError:
            return
        # Symlinked directories may point back up the tree
        key = (st.st_dev, st.st_ino)
        if key in visited:
            return
        visited.add(key)

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError:
                continue
            if is_dir:
                if entry.name not in excludes:
                    _walk(Path(entry.path))
            elif is_file and should_include_file(entry.name, extensions):
                files.append(Path(entry.path))

    _walk(Path(project_path))
    return files

"""Working-directory sandbox checks and listing filters for file tools.

``is_within`` compares resolved absolute paths.  Resolution follows
whatever the platform's canonicalisation does, so a symlink created after
the check can still point elsewhere; the sandbox is a guard against
mistakes, not a security boundary.
"""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path, PurePath

from btw.errors import PathSandboxError, ToolCallError

StrPath = str | os.PathLike[str]

IGNORABLE_FILES = frozenset({".DS_Store", "Thumbs.db"})

IGNORABLE_DIRS = frozenset(
    {
        # Version control
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # Package management
        "node_modules",
        "bower_components",
        "jspm_packages",
        # Python
        ".venv",
        "venv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        "eggs",
        ".eggs",
        ".tox",
        ".nox",
        # R
        ".Rproj.user",
        # JavaScript/TypeScript
        "out",
        ".next",
        ".nuxt",
        ".cache",
        # Docker
        ".docker",
        # Documentation builds
        "_site",
        "site",
        "public",
    }
)

# Matched as consecutive directory components.
IGNORABLE_DIR_SEQUENCES = (
    ("renv", "library"),
    ("packrat", "lib"),
    ("packrat", "src"),
    ("docs", "_build"),
    ("docs", "build"),
)

# Build artifacts, e.g. R Markdown ``report_files/`` or ``pkg.egg-info/``.
IGNORABLE_DIR_PATTERNS = ("*.egg-info", "*.egg", "*_files")


def is_within(path: StrPath, root: StrPath) -> bool:
    """True if ``path`` is ``root`` or a descendant of it."""
    return Path(path).resolve().is_relative_to(Path(root).resolve())


def check_within_current_directory(path: StrPath) -> Path:
    """Raise ``PathSandboxError`` unless ``path`` is inside the working directory.

    Returns the resolved path.  Paths that cannot be resolved at all raise
    ``ToolCallError``.
    """
    try:
        inside = is_within(path, Path.cwd())
        resolved = Path(path).resolve()
    except (OSError, ValueError) as e:
        raise ToolCallError(f"Invalid path '{path}': {e}") from e

    if not inside:
        raise PathSandboxError(
            f"Access to '{path}' is not allowed: it is outside of the project "
            "directory. Use a path relative to the current working directory."
        )
    return resolved


def _contains_sequence(parts: tuple[str, ...], sequence: tuple[str, ...]) -> bool:
    width = len(sequence)
    return any(
        parts[i : i + width] == sequence for i in range(len(parts) - width + 1)
    )


def is_ignorable(path: StrPath) -> bool:
    """True for OS metadata files and anything inside a tooling/build directory.

    Only the file name and the *ancestor* directories are inspected, so a
    ``node_modules`` directory itself is listed but its contents are not.
    Pass paths relative to the project root.
    """
    pure = PurePath(path)
    if pure.name in IGNORABLE_FILES:
        return True

    parents = tuple(part for part in pure.parent.parts if part not in (".", ""))
    for part in parents:
        if part in IGNORABLE_DIRS:
            return True
        if any(fnmatch(part, pattern) for pattern in IGNORABLE_DIR_PATTERNS):
            return True
    return any(_contains_sequence(parents, seq) for seq in IGNORABLE_DIR_SEQUENCES)

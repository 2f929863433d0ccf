"""Locate and read ``btw.md`` project context files.

A project file is markdown with an optional YAML front matter block::

    ---
    provider: anthropic
    model: claude-3-7-sonnet-latest
    tools: [files, session]
    ---

    Project instructions for the model...

Lookup order when no explicit path is given:

1. ``btw.md`` in the working directory or the nearest parent directory
2. ``~/btw.md``
3. ``~/.config/btw/btw.md``

Not finding a file is not an error; it only means there is no project
context.  An explicit path that does not exist is an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import frontmatter
from pydantic import BaseModel, Field

from btw.configs.config import DEFAULT_ENCODING
from btw.errors import NotFoundError

from .hidden import remove_hidden_content

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "btw.md"
USER_CONFIG_DIR = Path(".config") / "btw"


# ---------------------------------------------------------------------------
# Locator
# ---------------------------------------------------------------------------


def find_in_project_tree(
    filename: str, start_dir: str | os.PathLike[str] | None = None
) -> Path | None:
    """Find ``filename`` in ``start_dir`` or its nearest ancestor."""
    current = Path(start_dir if start_dir is not None else Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_user_global(filename: str) -> Path | None:
    """Find ``filename`` in the user's home or ``~/.config/btw``."""
    home = Path.home()
    for candidate in (home / filename, home / USER_CONFIG_DIR / filename):
        if candidate.is_file():
            return candidate
    return None


def locate_project_file(
    filename: str = PROJECT_FILE_NAME,
    start_dir: str | os.PathLike[str] | None = None,
) -> Path | None:
    return find_in_project_tree(filename, start_dir) or find_user_global(filename)


# ---------------------------------------------------------------------------
# Parsed file
# ---------------------------------------------------------------------------


class ProjectFile(BaseModel):
    """A parsed project file."""

    path: Path = Field(..., description="Where the file was read from")
    front_matter: dict[str, Any] = Field(
        default_factory=dict,
        description="YAML front matter; provider, tools and client arguments",
    )
    body_lines: list[str] = Field(
        default_factory=list,
        description="Markdown body lines with hidden regions removed",
    )

    @property
    def prompt(self) -> str | None:
        """The body as a single trimmed string, or ``None`` when empty."""
        text = "\n".join(self.body_lines).strip()
        return text or None

    @classmethod
    def from_text(cls, text: str, path: str | os.PathLike[str]) -> ProjectFile:
        post = frontmatter.loads(text)
        return cls(
            path=Path(path),
            front_matter=dict(post.metadata),
            body_lines=remove_hidden_content(post.content.splitlines()),
        )


def read_project_file(
    path: str | os.PathLike[str] | None = None,
) -> ProjectFile | None:
    """Read an explicit project file, or discover one.

    Raises:
        NotFoundError: when ``path`` is given but does not exist.
    """
    if path is not None:
        if not Path(path).is_file():
            raise NotFoundError(f"Invalid path: '{path}' does not exist.")
        found = Path(path)
    else:
        found = locate_project_file()
        if found is None:
            logger.debug("No %s project file found", PROJECT_FILE_NAME)
            return None

    logger.debug("Reading project file %s", found)
    return ProjectFile.from_text(found.read_text(encoding=DEFAULT_ENCODING), found)

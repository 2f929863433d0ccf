"""File tools: list, read and write files inside the project directory.

Every tool checks that its ``path`` resolves inside the current working
directory before touching the file system.  Listings hide tooling and
build directories (see ``btw.core.paths.is_ignorable``) but reading and
writing those paths is still allowed.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from itertools import islice
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from btw.configs.config import DEFAULT_ENCODING
from btw.core.paths import check_within_current_directory, is_ignorable
from btw.core.sniff import looks_like_text
from btw.errors import (
    NotATextFileError,
    NotFoundError,
    PathIsDirectoryError,
    ToolCallError,
)
from btw.infra.markdown import md_code_block, md_table

from .base import TOOL_PREFIX, ToolResult, build_tool
from .model import ToolAnnotations, ToolDescriptor

logger = logging.getLogger(__name__)

GROUP = "files"
DEFAULT_MAX_LINES = 1000
LISTING_COLUMNS = ("path", "type", "size", "modification_time")

LIST_FILES = f"{TOOL_PREFIX}files_list_files"
READ_TEXT_FILE = f"{TOOL_PREFIX}files_read_text_file"
WRITE_TEXT_FILE = f"{TOOL_PREFIX}files_write_text_file"

FileType = Literal["any", "file", "directory"]


def _relative(path: Path) -> str:
    return path.relative_to(Path.cwd().resolve()).as_posix() or "."


def _entry_type(path: Path) -> str:
    if path.is_symlink():
        return "symlink"
    if path.is_dir():
        return "directory"
    return "file"


def _file_info(path: Path) -> dict[str, object]:
    stat = path.lstat()
    return {
        "path": _relative(path),
        "type": _entry_type(path),
        "size": stat.st_size,
        "modification_time": datetime.fromtimestamp(stat.st_mtime).isoformat(
            sep=" ", timespec="seconds"
        ),
    }


# ---------------------------------------------------------------------------
# List files
# ---------------------------------------------------------------------------


def list_files(
    path: str | None = None, type: FileType = "any", regexp: str = ""
) -> ToolResult:
    """List files and directories under ``path``, recursively.

    If ``path`` is a file, only that file is described.  ``regexp`` is
    searched for in each path relative to the working directory.

    Returns a markdown table; ``extra`` holds the rows.
    """
    path = path or "."
    target = check_within_current_directory(path)

    if not target.exists():
        raise NotFoundError(
            f"The path '{path}' does not exist. Did you use a relative path?"
        )

    types = ("file", "directory", "symlink") if type == "any" else (type,)
    try:
        pattern = re.compile(regexp) if regexp else None
    except re.error as e:
        raise ToolCallError(f"Invalid regexp '{regexp}': {e}") from e

    entries = [target] if target.is_file() else sorted(target.rglob("*"))
    rows = []
    for entry in entries:
        relative = _relative(entry)
        if is_ignorable(relative):
            continue
        if pattern is not None and not pattern.search(relative):
            continue
        info = _file_info(entry)
        if info["type"] in types:
            rows.append(info)

    if not rows:
        return ToolResult(f"No {'/'.join(types)} found in {path}", [])

    logger.debug("Listed %d entries under %s", len(rows), path)
    return ToolResult(md_table(rows, LISTING_COLUMNS), rows)


class ListFilesInput(BaseModel):
    path: str = Field(
        default=".",
        description="The relative path to a folder or file. "
        "If `path` is a directory, all files or directories (see `type`) are "
        'listed. Use `"."` to refer to the current working directory. '
        "If `path` is a file, information for just the selected file is listed.",
    )
    type: FileType = Field(
        default="any",
        description="Whether to list files, directories or any file type, "
        "default is `any`.",
    )
    regexp: str = Field(
        default="",
        description="A regular expression to use to identify files, e.g. "
        '`regexp="[.]csv$"` to find files with a `.csv` extension. '
        "Note that it's best to be as general as possible to find the file you want.",
    )


LIST_FILES_ANNOTATIONS = ToolAnnotations(
    title="Project Files",
    read_only_hint=True,
    open_world_hint=False,
    idempotent_hint=False,
)


def list_files_tool():
    return build_tool(
        list_files,
        name=LIST_FILES,
        description="""List files or directories in the project.

WHEN TO USE:
* Use this tool to discover the file structure of a project.
* When you want to understand the project structure, use `type = "directory"` to list all directories.
* When you want to find a specific file, use `type = "file"` and `regexp` to filter files by name or extension.

CAUTION: Do not list all files in a project, instead prefer listing files in a specific directory with a `regexp` to filter to files of interest.""",  # noqa: E501
        args_schema=ListFilesInput,
        annotations=LIST_FILES_ANNOTATIONS,
        response_format="content_and_artifact",
    )


# ---------------------------------------------------------------------------
# Read a text file
# ---------------------------------------------------------------------------


def read_text_file(path: str, max_lines: int = DEFAULT_MAX_LINES) -> ToolResult:
    """Read up to ``max_lines`` lines of a text file as a fenced code block."""
    target = check_within_current_directory(path)

    if not target.is_file():
        raise NotFoundError(
            f"Path '{path}' is not a file or does not exist. Check the path "
            "and ensure that it is provided as a relative path."
        )

    if looks_like_text(target) is not True:
        raise NotATextFileError(f"Path '{path}' is not a path to a text file.")

    try:
        with open(target, encoding=DEFAULT_ENCODING, errors="replace") as f:
            lines = [line.rstrip("\r\n") for line in islice(f, max_lines)]
    except (OSError, ValueError) as e:
        raise ToolCallError(f"Could not read '{path}': {e}") from e

    return ToolResult(
        md_code_block(target.suffix.lstrip("."), lines),
        {"path": _relative(target)},
    )


class ReadTextFileInput(BaseModel):
    path: str = Field(
        ...,
        description="The relative path to a file that can be read as text, "
        "such as a CSV, JSON, HTML, markdown file, etc.",
    )
    max_lines: int = Field(
        default=DEFAULT_MAX_LINES,
        ge=1,
        description="How many lines to include from the file? "
        "Prefer smaller values for large files.",
    )


READ_TEXT_FILE_ANNOTATIONS = ToolAnnotations(
    title="Read File",
    read_only_hint=True,
    open_world_hint=False,
    idempotent_hint=False,
)


def read_text_file_tool():
    return build_tool(
        read_text_file,
        name=READ_TEXT_FILE,
        description="Read an entire text file.",
        args_schema=ReadTextFileInput,
        annotations=READ_TEXT_FILE_ANNOTATIONS,
        response_format="content_and_artifact",
    )


# ---------------------------------------------------------------------------
# Write a text file
# ---------------------------------------------------------------------------


def write_text_file(path: str, content: str) -> ToolResult:
    """Overwrite (or create) a text file with ``content``.

    Parent directories are created as needed.  ``extra`` carries the path,
    the new content and the previous content (``None`` for a new file) so
    callers can offer an undo or diff.
    """
    target = check_within_current_directory(path)

    if target.is_dir():
        raise PathIsDirectoryError(
            f"Path '{path}' is a directory, not a file. Please provide a file path."
        )

    previous_content = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists():
            previous_content = target.read_text(
                encoding=DEFAULT_ENCODING, errors="replace"
            )
        target.write_text(content, encoding=DEFAULT_ENCODING)
    except (OSError, ValueError) as e:
        raise ToolCallError(f"Could not write to '{path}': {e}") from e

    logger.info("Wrote %d characters to %s", len(content), path)

    return ToolResult(
        "Success",
        {
            "path": _relative(target),
            "content": content,
            "previous_content": previous_content,
        },
    )


class WriteTextFileInput(BaseModel):
    path: str = Field(
        ...,
        description="The relative path to the file to write. The file will be "
        "created if it doesn't exist, or overwritten if it does.",
    )
    content: str = Field(
        ..., description="The complete text content to write to the file."
    )


WRITE_TEXT_FILE_ANNOTATIONS = ToolAnnotations(
    title="Write File",
    read_only_hint=False,
    open_world_hint=False,
    idempotent_hint=True,
)


def write_text_file_tool():
    return build_tool(
        write_text_file,
        name=WRITE_TEXT_FILE,
        description=f"""Write content to a text file.

If the file doesn't exist, it will be created, along with any necessary parent directories.

WHEN TO USE:
Use this tool only when the user has explicitly asked you to write or create a file.
Do not use for temporary or one-off content; prefer direct responses for those cases.
Consider checking with the user to ensure that the file path is correct and that they want to write to a file before calling this tool.

CAUTION:
This completely overwrites any existing file content.
To modify an existing file, first read its content using `{READ_TEXT_FILE}`, make your changes to the text, then write back the complete modified content.""",  # noqa: E501
        args_schema=WriteTextFileInput,
        annotations=WRITE_TEXT_FILE_ANNOTATIONS,
        response_format="content_and_artifact",
    )


def register_file_tools(registry) -> None:
    """Register the file tools under the `files` group."""
    for name, factory, annotations in (
        (LIST_FILES, list_files_tool, LIST_FILES_ANNOTATIONS),
        (READ_TEXT_FILE, read_text_file_tool, READ_TEXT_FILE_ANNOTATIONS),
        (WRITE_TEXT_FILE, write_text_file_tool, WRITE_TEXT_FILE_ANNOTATIONS),
    ):
        registry.register(
            ToolDescriptor(
                name=name, group=GROUP, factory=factory, annotations=annotations
            )
        )

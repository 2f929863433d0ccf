"""CLI commands: inspect tools and the resolved project context."""

import logging
import sys
from typing import TextIO

import yaml

from btw.configs.options import BtwOptions
from btw.core.project_file import read_project_file
from btw.core.resolver import resolve_tool_selection
from btw.errors import BtwError
from btw.infra.markdown import md_table
from btw.tools.model import ToolSelection
from btw.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

TOOL_COLUMNS = ("group", "name", "title", "is_read_only", "is_open_world")


def show_tools(
    registry: ToolRegistry,
    tokens: list[str],
    output_stream: TextIO = sys.stdout,
) -> int:
    """Print the available tools, optionally limited to names or groups."""
    selection = ToolSelection.of(*tokens) if tokens else ToolSelection.ALL
    names = {tool.name for tool in registry.resolve_selection(selection)}
    rows = [row for row in registry.describe() if row["name"] in names]
    if not rows:
        output_stream.write(f"No tools match: {selection}\n")
        return 1
    output_stream.write(md_table(rows, TOOL_COLUMNS) + "\n")
    return 0


def show_context(
    registry: ToolRegistry,
    options: BtwOptions,
    path: str | None = None,
    tools: str | None = None,
    output_stream: TextIO = sys.stdout,
) -> int:
    """Print the tools, front matter and prompt a new session would get."""
    try:
        project = read_project_file(path)
    except BtwError as e:
        logger.error("%s", e)
        output_stream.write(f"Error: {e}\n")
        return 1

    selection = resolve_tool_selection(tools, options, project)
    active = [tool.name for tool in registry.resolve_selection(selection)]

    out = output_stream.write
    out(f"Project file: {project.path if project else '(none)'}\n")
    out(f"Tool selection: {selection}\n")
    for name in active:
        out(f"  - {name}\n")

    if project is not None:
        if project.front_matter:
            out("\nFront matter:\n")
            out(yaml.safe_dump(project.front_matter, sort_keys=False))
        out("\nProject prompt:\n")
        out((project.prompt or "(empty)") + "\n")
    return 0

"""Tool registry for langchain chat sessions."""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.tools import BaseTool

from btw.errors import DuplicateNameError
from btw.infra.singleton import singleton

from .model import ToolDescriptor, ToolSelection, tool_annotations

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Ordered registry of tool descriptors keyed by unique name.

    Descriptors are registered once at start-up and never mutated.
    Listing and selection always follow registration order.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        """Add a descriptor; names are unique across all groups."""
        if descriptor.name in self._descriptors:
            raise DuplicateNameError(descriptor.name)
        self._descriptors[descriptor.name] = descriptor
        return descriptor

    def list_all(self) -> list[ToolDescriptor]:
        return list(self._descriptors.values())

    def groups(self) -> list[str]:
        return list(dict.fromkeys(d.group for d in self._descriptors.values()))

    def resolve_selection(
        self, selection: ToolSelection | None = None
    ) -> list[BaseTool]:
        """Instantiate the tools picked by ``selection``.

        ``None`` selects everything.  Tokens that match no name or group
        are ignored so configs can mention groups this version lacks.
        Factories run on every call.
        """
        if selection is None:
            selection = ToolSelection.ALL
        if selection.is_none:
            return []

        tools: list[BaseTool] = []
        for descriptor in self._descriptors.values():
            if not selection.matches(descriptor):
                continue
            tool = descriptor.build()
            if tool is None:
                logger.debug("Tool '%s' is unavailable, skipping", descriptor.name)
                continue
            tools.append(tool)

        if not selection.is_all:
            known = set(self._descriptors) | set(self.groups())
            unknown = sorted(selection.tokens - known)
            if unknown:
                logger.info("Ignoring unknown tools or groups: %s", ", ".join(unknown))
        return tools

    def describe(self) -> list[dict[str, Any]]:
        """One row per available tool, for listings."""
        rows = []
        for descriptor in self._descriptors.values():
            tool = descriptor.build()
            if tool is None:
                continue
            annotations = tool_annotations(tool)
            rows.append(
                {
                    "group": descriptor.group,
                    "name": tool.name,
                    "description": tool.description,
                    "title": annotations.title or tool.name,
                    "is_read_only": annotations.read_only_hint,
                    "is_open_world": annotations.open_world_hint,
                }
            )
        return rows

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors


def register_builtin_tools(registry: ToolRegistry) -> ToolRegistry:
    """Register every tool that ships with btw."""
    from .files import register_file_tools
    from .session import register_session_tools

    register_file_tools(registry)
    register_session_tools(registry)
    return registry


# Global registry instance
@singleton
def get_tool_registry() -> ToolRegistry:
    """Get the global tool registry, populated with the built-in tools."""
    return register_builtin_tools(ToolRegistry())


def btw_tools(*tokens: str) -> list[BaseTool]:
    """Return built-in tools by name or group; all tools when none given."""
    selection = ToolSelection.of(*tokens) if tokens else ToolSelection.ALL
    return get_tool_registry().resolve_selection(selection)

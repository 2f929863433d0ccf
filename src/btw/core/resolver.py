"""Resolve the chat client, tool selection and project prompt for a session.

Client, highest priority first (only the first available source is used):

1. The ``client`` argument
2. ``BtwOptions.client``, cloned
3. ``provider`` (plus other client arguments) from the project file
4. The default provider

Tool selection, highest priority first:

1. The ``tools`` argument
2. ``BtwOptions.tools``
3. ``tools`` from the project file
4. All tools

A ``tools`` value of ``False`` or ``"none"`` from the winning source turns
tools off for the session.  The argument always wins, so ``tools=False``
cannot be re-enabled by options or the project file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from btw.configs.options import BtwOptions
from btw.tools.model import ToolSelection

from .chat import ChatClient
from .project_file import ProjectFile, read_project_file
from .providers import DEFAULT_PROVIDER, get_provider

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"provider", "tools"})


@dataclass(frozen=True)
class ResolvedConfig:
    """Everything a session needs, resolved once per session start."""

    client: ChatClient
    tool_selection: ToolSelection
    project_prompt: str | None = None
    project_file: ProjectFile | None = None

    @property
    def skip_tools(self) -> bool:
        return self.tool_selection.is_none


def _check_client(client: Any, source: str) -> ChatClient:
    if not isinstance(client, ChatClient):
        raise TypeError(
            f"{source} must be a chat client with get/set system prompt and "
            f"tools methods, not {type(client).__name__}."
        )
    return client


def resolve_tool_selection(
    tools: Any = None,
    options: BtwOptions | None = None,
    project: ProjectFile | None = None,
) -> ToolSelection:
    """Pick the first tool selection given, falling back to all tools."""
    for value in (
        tools,
        options.tools if options else None,
        project.front_matter.get("tools") if project else None,
    ):
        selection = ToolSelection.parse(value)
        if selection is not None:
            return selection
    return ToolSelection.ALL


class ConfigResolver:
    """Build a ``ResolvedConfig`` from arguments, options and ``btw.md``."""

    def __init__(self, options: BtwOptions) -> None:
        self.options = options

    def resolve(
        self,
        client: Any = None,
        tools: Any = None,
        path: str | os.PathLike[str] | None = None,
    ) -> ResolvedConfig:
        project = read_project_file(path)
        return ResolvedConfig(
            client=self.resolve_client(client, project),
            tool_selection=resolve_tool_selection(tools, self.options, project),
            project_prompt=project.prompt if project else None,
            project_file=project,
        )

    def resolve_client(
        self, client: Any = None, project: ProjectFile | None = None
    ) -> ChatClient:
        if client is not None:
            return _check_client(client, "`client`")

        if self.options.client is not None:
            default = _check_client(self.options.client, "The default client option")
            return default.clone()

        if project is not None and project.front_matter.get("provider"):
            return self._client_from_project(project)

        return get_provider(DEFAULT_PROVIDER, self.options.providers)()

    def _client_from_project(self, project: ProjectFile) -> ChatClient:
        provider = str(project.front_matter["provider"])
        chat_args = {
            key: value
            for key, value in project.front_matter.items()
            if key not in RESERVED_KEYS
        }
        constructor = get_provider(provider, self.options.providers)
        chat = _check_client(constructor(**chat_args), f"Provider '{provider}'")

        if chat_args.get("model") is not None:
            logger.info("Using %s from %s.", chat_args["model"], provider)
        return chat

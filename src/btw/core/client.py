"""Create a chat client set up with btw tools and project context."""

from __future__ import annotations

import logging
import os
from typing import Any

from btw.configs.options import BtwOptions, get_options
from btw.tools.registry import ToolRegistry, get_tool_registry
from btw.tools.session import platform_info

from .chat import ChatClient
from .prompt import build_system_prompt
from .resolver import ConfigResolver

logger = logging.getLogger(__name__)


def btw_client(
    client: Any = None,
    tools: Any = None,
    path: str | os.PathLike[str] | None = None,
    *,
    options: BtwOptions | None = None,
    registry: ToolRegistry | None = None,
) -> ChatClient:
    """Return a chat client with btw's system prompt and tools installed.

    Parameters
    ----------
    client
        Chat client to configure.  Defaults to ``options.client`` (cloned),
        then the ``provider`` in ``btw.md``, then Anthropic.
    tools
        Tool names or groups, ``"all"``, or ``False``/``"none"`` to register
        no tools.  Defaults to ``options.tools``, then ``tools`` in
        ``btw.md``, then all tools.
    path
        Explicit ``btw.md`` path.  When omitted the file is searched for in
        the working directory, its parents and the user's home.
    options
        Process defaults; ``get_options()`` when omitted.
    registry
        Tool registry; the built-in registry when omitted.
    """
    options = options or get_options()
    registry = registry or get_tool_registry()

    config = ConfigResolver(options).resolve(client, tools, path)
    client = config.client

    client.set_system_prompt(
        build_system_prompt(
            platform=platform_info(),
            project_prompt=config.project_prompt,
            existing_prompt=client.get_system_prompt(),
            with_tools=not config.skip_tools,
        )
    )

    if not config.skip_tools:
        selected = registry.resolve_selection(config.tool_selection)
        logger.debug(
            "Registering %d tools for selection %s", len(selected), config.tool_selection
        )
        client.set_tools([*client.get_tools(), *selected])

    return client

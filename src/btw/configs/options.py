"""Process-wide defaults for new btw sessions.

``BtwOptions`` is passed explicitly to ``ConfigResolver``.  The
``get_options()`` singleton exists for interactive use: set
``get_options().client`` once and every later ``btw_client()`` call starts
from a clone of it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from btw.infra.singleton import singleton
from btw.tools.model import ToolSelection

from .config import BtwSettings, get_settings

if TYPE_CHECKING:
    from btw.core.chat import ChatClient
    from btw.core.providers import ProviderConstructor


def _default_providers() -> dict[str, ProviderConstructor]:
    from btw.core.providers import PROVIDERS

    return dict(PROVIDERS)


@dataclass
class BtwOptions:
    """Defaults consulted when a session does not specify its own.

    Attributes:
        client: Chat client cloned for each new session.
        tools: Tool selection used when the caller gives none.
        providers: ``chat_*`` name to constructor mapping used for the
            ``provider`` key of project files.
    """

    client: ChatClient | None = None
    tools: ToolSelection | None = None
    providers: Mapping[str, ProviderConstructor] = field(
        default_factory=_default_providers
    )

    def set_tools(self, value: Any) -> None:
        self.tools = ToolSelection.parse(value)

    @classmethod
    def from_settings(cls, settings: BtwSettings | None = None) -> BtwOptions:
        settings = settings or get_settings()
        return cls(tools=ToolSelection.parse(settings.tools))


@singleton
def get_options() -> BtwOptions:
    """Get the process-wide options, initialised from ``BTW_*`` settings."""
    return BtwOptions.from_settings()

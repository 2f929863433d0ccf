"""Project-aware tools and context for LLM chat sessions."""

from .configs.options import BtwOptions, get_options  # noqa: F401
from .core.chat import Chat, ChatClient  # noqa: F401
from .core.client import btw_client  # noqa: F401
from .core.resolver import ConfigResolver, ResolvedConfig  # noqa: F401
from .tools.model import ToolAnnotations, ToolDescriptor, ToolSelection  # noqa: F401
from .tools.registry import ToolRegistry, btw_tools, get_tool_registry  # noqa: F401

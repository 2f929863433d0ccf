"""Chat client wrapper around a langchain ``BaseChatModel``.

btw only needs four things from a chat client: read and replace the
system prompt, and read and replace the tool list.  ``ChatClient`` is
that protocol; ``Chat`` is the implementation used for clients built
from a provider name.  Any object implementing the protocol (plus
``clone``) can be passed as ``client``.
"""

from __future__ import annotations

import logging
from typing import Protocol, Self, runtime_checkable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.tools import BaseTool

logger = logging.getLogger(__name__)

_DEFAULT_MAX_TOOL_ROUNDS = 10


@runtime_checkable
class ChatClient(Protocol):
    """Structural protocol for chat clients btw can configure."""

    def get_system_prompt(self) -> str | None: ...

    def set_system_prompt(self, value: str | None) -> None: ...

    def get_tools(self) -> list[BaseTool]: ...

    def set_tools(self, tools: list[BaseTool]) -> None: ...

    def clone(self) -> Self: ...


def _message_text(message: AIMessage) -> str:
    if isinstance(message.content, str):
        return message.content
    return "".join(
        block.get("text", "") if isinstance(block, dict) else str(block)
        for block in message.content
    )


class Chat:
    """A conversation with a langchain chat model and a set of tools."""

    def __init__(
        self,
        model: BaseChatModel,
        *,
        provider: str | None = None,
        system_prompt: str | None = None,
        tools: list[BaseTool] | None = None,
        max_tool_rounds: int = _DEFAULT_MAX_TOOL_ROUNDS,
    ) -> None:
        self.model = model
        self.provider = provider or model._llm_type
        self.max_tool_rounds = max_tool_rounds
        self._system_prompt = system_prompt
        self._tools: list[BaseTool] = list(tools or [])
        self._history: list[BaseMessage] = []

    # ---- ChatClient ------------------------------------------------------

    def get_system_prompt(self) -> str | None:
        return self._system_prompt

    def set_system_prompt(self, value: str | None) -> None:
        self._system_prompt = value

    def get_tools(self) -> list[BaseTool]:
        return self._tools[:]

    def set_tools(self, tools: list[BaseTool]) -> None:
        self._tools = list(tools)

    def clone(self) -> Chat:
        """Copy the prompt, tools and history; the model is shared."""
        other = Chat(
            self.model,
            provider=self.provider,
            system_prompt=self._system_prompt,
            tools=self._tools,
            max_tool_rounds=self.max_tool_rounds,
        )
        other._history = self._history[:]
        return other

    # ---- Conversation ----------------------------------------------------

    @property
    def model_name(self) -> str | None:
        return getattr(self.model, "model", None) or getattr(
            self.model, "model_name", None
        )

    def get_history(self) -> list[BaseMessage]:
        return self._history[:]

    def _messages(self) -> list[BaseMessage]:
        if self._system_prompt:
            return [SystemMessage(self._system_prompt), *self._history]
        return self._history[:]

    def _run_tool_calls(self, reply: AIMessage) -> None:
        tools = {tool.name: tool for tool in self._tools}
        for call in reply.tool_calls:
            tool = tools.get(call["name"])
            if tool is None:
                logger.warning("Model requested unknown tool '%s'", call["name"])
                result = ToolMessage(
                    f"Unknown tool '{call['name']}'.",
                    tool_call_id=call["id"],
                    status="error",
                )
            else:
                logger.info("Calling tool %s", call["name"])
                result = tool.invoke({**call, "type": "tool_call"})
            self._history.append(result)

    def chat(self, message: str) -> str:
        """Send ``message`` and return the final text reply.

        Tool calls requested by the model are executed and their results
        sent back until the model answers without calling a tool.
        """
        self._history.append(HumanMessage(message))
        runnable = self.model.bind_tools(self._tools) if self._tools else self.model

        for _ in range(self.max_tool_rounds):
            reply = runnable.invoke(self._messages())
            self._history.append(reply)
            if not getattr(reply, "tool_calls", None):
                return _message_text(reply)
            self._run_tool_calls(reply)

        logger.warning(
            "Stopped after %d tool rounds without a final answer",
            self.max_tool_rounds,
        )
        return _message_text(reply)

    def __repr__(self) -> str:
        return (
            f"<Chat provider={self.provider!r} model={self.model_name!r} "
            f"tools={len(self._tools)} turns={len(self._history)}>"
        )

"""Tests for session assembly and the Chat wrapper."""

from pathlib import Path
from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, ToolMessage

from btw.configs.options import BtwOptions
from btw.core.chat import Chat, ChatClient
from btw.core.client import btw_client
from btw.core.prompt import PROJECT_CONTEXT_HEADER, TOOLS_HEADER, build_system_prompt
from btw.tools.files import list_files_tool

from .conftest import fake_chat


class ToolCallingFakeModel(GenericFakeChatModel):
    """Fake model that accepts tools and replays scripted messages."""

    def bind_tools(self, tools: Any, **kwargs: Any):
        return self


class TestBuildSystemPrompt:
    def test_sections_in_order(self):
        prompt = build_system_prompt(
            platform="<system_info>\nX: y\n</system_info>",
            project_prompt="Be brief.",
            existing_prompt="You are helpful.",
        )
        assert prompt.index("# System and Session Context") < prompt.index(TOOLS_HEADER)
        assert prompt.index(TOOLS_HEADER) < prompt.index(PROJECT_CONTEXT_HEADER)
        assert prompt.index("Be brief.") < prompt.index("---\n")
        assert prompt.endswith("---\n\nYou are helpful.")

    def test_without_tools_or_project(self):
        prompt = build_system_prompt(platform="<system_info></system_info>", with_tools=False)
        assert TOOLS_HEADER not in prompt
        assert PROJECT_CONTEXT_HEADER not in prompt


class TestBtwClient:
    def test_installs_prompt_and_tools(self, project_dir: Path, options: BtwOptions):
        (project_dir / "btw.md").write_text(
            "---\ntools: [session]\n---\n\nAlways answer in French.\n"
        )
        client = btw_client(client=fake_chat(system_prompt="Base prompt."), options=options)

        prompt = client.get_system_prompt()
        assert "<system_info>" in prompt
        assert "Always answer in French." in prompt
        assert prompt.endswith("Base prompt.")
        assert [tool.name for tool in client.get_tools()] == [
            "btw_tool_session_platform_info",
            "btw_tool_session_package_info",
        ]

    def test_existing_tools_come_first(self, project_dir: Path, options: BtwOptions):
        chat = fake_chat()
        chat.set_tools([list_files_tool()])
        client = btw_client(client=chat, tools="session", options=options)
        assert [tool.name for tool in client.get_tools()] == [
            "btw_tool_files_list_files",
            "btw_tool_session_platform_info",
            "btw_tool_session_package_info",
        ]

    def test_tools_false_registers_nothing(self, project_dir: Path, options: BtwOptions):
        client = btw_client(client=fake_chat(), tools=False, options=options)
        assert client.get_tools() == []
        assert TOOLS_HEADER not in client.get_system_prompt()

    def test_uses_default_provider(self, project_dir: Path, options: BtwOptions, provider_calls):
        client = btw_client(options=options)
        assert isinstance(client, ChatClient)
        assert provider_calls == [{"provider": "anthropic"}]


class TestChat:
    def test_plain_reply(self):
        chat = fake_chat("Hello!")
        assert chat.chat("Hi") == "Hello!"
        assert len(chat.get_history()) == 2

    def test_clone_is_independent(self):
        chat = fake_chat(system_prompt="a")
        other = chat.clone()
        other.set_system_prompt("b")
        other.set_tools([])
        assert chat.get_system_prompt() == "a"
        assert other.model is chat.model

    def test_runs_tool_calls(self, project_dir: Path, options: BtwOptions):
        model = ToolCallingFakeModel(
            messages=iter(
                [
                    AIMessage(
                        content="",
                        tool_calls=[
                            {
                                "name": "btw_tool_files_write_text_file",
                                "args": {"path": "hello.txt", "content": "hi"},
                                "id": "call_1",
                            }
                        ],
                    ),
                    AIMessage(content="Wrote hello.txt"),
                ]
            )
        )
        chat = btw_client(client=Chat(model), tools="files", options=options)

        assert chat.chat("Write hi to hello.txt") == "Wrote hello.txt"
        assert (project_dir / "hello.txt").read_text() == "hi"
        tool_messages = [m for m in chat.get_history() if isinstance(m, ToolMessage)]
        assert tool_messages[0].artifact["previous_content"] is None

    def test_unknown_tool_is_reported(self):
        model = ToolCallingFakeModel(
            messages=iter(
                [
                    AIMessage(
                        content="",
                        tool_calls=[{"name": "nope", "args": {}, "id": "call_1"}],
                    ),
                    AIMessage(content="Sorry"),
                ]
            )
        )
        chat = Chat(model)
        assert chat.chat("go") == "Sorry"

    @pytest.mark.parametrize("bad", [None, "client", 3])
    def test_protocol_check(self, bad):
        assert not isinstance(bad, ChatClient)

"""Shared fixtures: isolated project/home directories and fake chat models."""

from pathlib import Path
from typing import Any, Callable

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from btw.configs.options import BtwOptions, get_options
from btw.core.chat import Chat
from btw.tools.registry import get_tool_registry


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``Path.home()`` at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def project_dir(tmp_path: Path, home_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty project directory that is also the working directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


def fake_chat(*responses: str, system_prompt: str | None = None) -> Chat:
    return Chat(
        FakeListChatModel(responses=list(responses) or ["ok"]),
        provider="fake",
        system_prompt=system_prompt,
    )


@pytest.fixture
def provider_calls() -> list[dict[str, Any]]:
    return []


@pytest.fixture
def providers(provider_calls: list[dict[str, Any]]) -> dict[str, Callable[..., Chat]]:
    """Provider constructors that record their arguments instead of calling an API."""

    def recorder(name: str) -> Callable[..., Chat]:
        def construct(**kwargs: Any) -> Chat:
            provider_calls.append({"provider": name, **kwargs})
            chat = fake_chat()
            chat.provider = name
            return chat

        return construct

    return {
        "chat_anthropic": recorder("anthropic"),
        "chat_openai": recorder("openai"),
        "chat_ollama": recorder("ollama"),
    }


@pytest.fixture
def options(providers: dict[str, Callable[..., Chat]]) -> BtwOptions:
    return BtwOptions(providers=providers)


@pytest.fixture(autouse=True)
def _reset_singletons():
    get_options.reset()
    get_tool_registry.reset()
    yield
    get_options.reset()
    get_tool_registry.reset()

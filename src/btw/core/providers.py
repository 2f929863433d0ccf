"""Provider name to chat-client constructor mapping.

A ``provider`` value from a project file is normalised to a
``chat_<name>`` key: ``"OpenAI"`` and ``"chat_openai"`` both become
``chat_openai``.  Constructors build the langchain model with
``init_chat_model`` so provider packages (``langchain-anthropic``,
``langchain-openai``, ...) are only imported when used.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from langchain.chat_models import init_chat_model

from btw.errors import ProviderNotFoundError

from .chat import Chat

ProviderConstructor = Callable[..., Any]

DEFAULT_PROVIDER = "chat_anthropic"

DEFAULT_MODELS = {
    "anthropic": "claude-3-7-sonnet-latest",
    "openai": "gpt-4o",
    "ollama": "llama3.1",
    "google_genai": "gemini-2.0-flash",
    "mistralai": "mistral-large-latest",
}


def _constructor(model_provider: str) -> ProviderConstructor:
    def construct(model: str | None = None, **kwargs: Any) -> Chat:
        llm = init_chat_model(
            model or DEFAULT_MODELS[model_provider],
            model_provider=model_provider,
            **kwargs,
        )
        return Chat(llm, provider=model_provider)

    construct.__name__ = f"chat_{model_provider}"
    construct.__doc__ = f"Create a ``Chat`` backed by a {model_provider} model."
    return construct


chat_anthropic = _constructor("anthropic")
chat_openai = _constructor("openai")
chat_ollama = _constructor("ollama")
chat_google_genai = _constructor("google_genai")
chat_mistralai = _constructor("mistralai")

PROVIDERS: dict[str, ProviderConstructor] = {
    "chat_anthropic": chat_anthropic,
    "chat_claude": chat_anthropic,
    "chat_openai": chat_openai,
    "chat_ollama": chat_ollama,
    "chat_google_genai": chat_google_genai,
    "chat_gemini": chat_google_genai,
    "chat_mistralai": chat_mistralai,
    "chat_mistral": chat_mistralai,
}


def provider_key(provider: str) -> str:
    """Normalise a provider token to its ``chat_*`` constructor name."""
    key = provider.strip().lower().replace(" ", "_")
    if not key.startswith("chat_"):
        key = f"chat_{key}"
    return key


def get_provider(
    provider: str, providers: Mapping[str, ProviderConstructor] = PROVIDERS
) -> ProviderConstructor:
    key = provider_key(provider)
    try:
        return providers[key]
    except KeyError:
        raise ProviderNotFoundError(provider, sorted(providers)) from None

"""Exceptions raised by the registry, the config resolver and the tools."""

from __future__ import annotations

from langchain_core.tools import ToolException


class BtwError(Exception):
    """Base class for every error raised by btw."""


# ---------------------------------------------------------------------------
# Programmer / configuration errors
# ---------------------------------------------------------------------------


class DuplicateNameError(BtwError, ValueError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A tool named '{name}' is already registered.")
        self.name = name


class ProviderNotFoundError(BtwError, ValueError):
    """Raised when a project file names a provider with no known constructor."""

    def __init__(self, provider: str, known: list[str]) -> None:
        super().__init__(
            f"Unknown provider '{provider}'. "
            f"Known providers: {', '.join(known) or '(none)'}"
        )
        self.provider = provider


# ---------------------------------------------------------------------------
# Tool-call errors: reported back to the model, never retried
# ---------------------------------------------------------------------------


class ToolCallError(BtwError, ToolException):
    """Base class for errors that surface to the model as a tool failure."""


class NotFoundError(ToolCallError, FileNotFoundError):
    """Raised when a referenced file or project file does not exist."""


class PathSandboxError(ToolCallError, PermissionError):
    """Raised when a path resolves outside of the working directory."""


class NotATextFileError(ToolCallError):
    """Raised when reading a file that is not classified as text."""


class PathIsDirectoryError(ToolCallError, IsADirectoryError):
    """Raised when writing a file onto an existing directory."""

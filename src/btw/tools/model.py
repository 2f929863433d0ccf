"""Tool descriptor, capability hint and selection models.

A ``ToolDescriptor`` is what gets registered: a stable name, a group and
a factory that builds the langchain tool on demand.  The factory may
return ``None`` (e.g. an optional dependency is missing), in which case
the tool is silently left out.

``ToolSelection`` is the parsed form of every way a user can pick tools:
the ``tools`` argument, the ``BTW_TOOLS`` setting and the ``tools`` key of
a ``btw.md`` front matter.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from langchain_core.tools import BaseTool
from pydantic import BaseModel, ConfigDict

ANNOTATIONS_KEY = "annotations"


class ToolAnnotations(BaseModel):
    """Self-reported side-effect profile of a tool.

    ``None`` means the tool does not say.  These hints are informational:
    btw keeps them verbatim and leaves presentation to the caller.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    read_only_hint: bool | None = None
    open_world_hint: bool | None = None
    idempotent_hint: bool | None = None


def tool_annotations(tool: BaseTool) -> ToolAnnotations:
    """Return the annotations stored on a tool, or all-unknown hints."""
    raw = (tool.metadata or {}).get(ANNOTATIONS_KEY)
    if raw is None:
        return ToolAnnotations()
    return ToolAnnotations.model_validate(raw)


ToolFactory = Callable[[], BaseTool | None]


@dataclass(frozen=True)
class ToolDescriptor:
    """One registry entry."""

    name: str
    group: str
    factory: ToolFactory
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    def build(self) -> BaseTool | None:
        return self.factory()


@dataclass(frozen=True)
class ToolSelection:
    """Which tools to activate: everything, nothing, or names/groups."""

    mode: str = "tokens"
    tokens: frozenset[str] = frozenset()

    ALL: ClassVar[ToolSelection]
    NONE: ClassVar[ToolSelection]

    @classmethod
    def of(cls, *tokens: str) -> ToolSelection:
        return cls("tokens", frozenset(tokens))

    @property
    def is_all(self) -> bool:
        return self.mode == "all"

    @property
    def is_none(self) -> bool:
        return self.mode == "none"

    def matches(self, descriptor: ToolDescriptor) -> bool:
        if self.is_none:
            return False
        if self.is_all:
            return True
        return descriptor.name in self.tokens or descriptor.group in self.tokens

    @classmethod
    def parse(cls, value: Any) -> ToolSelection | None:
        """Parse a user-supplied tool selection.

        ``None`` means "no opinion" and is returned unchanged so callers can
        fall through to the next source.  ``False`` and ``"none"`` disable
        tools, ``True`` and ``"all"`` enable every tool, strings are split on
        commas and any other iterable is read as a collection of tokens.  A
        string or iterable without any tokens is also "no opinion".
        """
        if value is None or isinstance(value, ToolSelection):
            return value
        if isinstance(value, bool):
            return cls.ALL if value else cls.NONE
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, Iterable):
            tokens = []
            for token in value:
                if not isinstance(token, str):
                    raise TypeError(
                        f"Tool selection entries must be strings, got {token!r}"
                    )
                token = token.strip()
                if token:
                    tokens.append(token)
            if not tokens:
                return None
            lowered = [token.lower() for token in tokens]
            if lowered == ["none"]:
                return cls.NONE
            if lowered == ["all"]:
                return cls.ALL
            return cls.of(*tokens)
        raise TypeError(
            "Tool selection must be a bool, a string or a list of strings, "
            f"got {type(value).__name__}"
        )

    def __str__(self) -> str:
        if self.mode != "tokens":
            return self.mode
        return ", ".join(sorted(self.tokens)) or "(empty)"


ToolSelection.ALL = ToolSelection("all")
ToolSelection.NONE = ToolSelection("none")

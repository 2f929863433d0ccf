"""Helpers for building btw tools as langchain ``StructuredTool``s."""

from collections.abc import Callable
from typing import Any, Literal, NamedTuple

from langchain_core.tools import StructuredTool
from pydantic import BaseModel

from .model import ANNOTATIONS_KEY, ToolAnnotations

TOOL_PREFIX = "btw_tool_"


def build_tool(
    func: Callable[..., Any],
    *,
    name: str,
    description: str,
    args_schema: type[BaseModel],
    annotations: ToolAnnotations,
    response_format: Literal["content", "content_and_artifact"] = "content",
) -> StructuredTool:
    """Wrap ``func`` so tool-call errors are reported to the model as text."""
    return StructuredTool.from_function(
        func=func,
        name=name,
        description=description,
        args_schema=args_schema,
        response_format=response_format,
        metadata={ANNOTATIONS_KEY: annotations.model_dump()},
        handle_tool_error=True,
        handle_validation_error=True,
    )


class ToolResult(NamedTuple):
    """Tool output: ``value`` goes to the model, ``extra`` stays with the caller.

    Being a 2-tuple, it is accepted as-is by tools built with
    ``response_format="content_and_artifact"``.
    """

    value: str
    extra: Any = None

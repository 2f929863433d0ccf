"""Tests for tool selection parsing and the tool registry."""

import pytest
from langchain_core.tools import BaseTool
from pydantic import BaseModel

from btw.errors import DuplicateNameError
from btw.tools.base import build_tool
from btw.tools.model import (
    ToolAnnotations,
    ToolDescriptor,
    ToolSelection,
    tool_annotations,
)
from btw.tools.registry import ToolRegistry, btw_tools, get_tool_registry


class EmptyInput(BaseModel):
    pass


def _descriptor(
    name: str, group: str, available: bool = True, **hints
) -> ToolDescriptor:
    annotations = ToolAnnotations(title=name.title(), **hints)

    def factory() -> BaseTool | None:
        if not available:
            return None
        return build_tool(
            lambda: name,
            name=name,
            description=f"The {name} tool.",
            args_schema=EmptyInput,
            annotations=annotations,
        )

    return ToolDescriptor(name=name, group=group, factory=factory, annotations=annotations)


@pytest.fixture
def registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(_descriptor("list", "files", read_only_hint=True))
    registry.register(_descriptor("platform", "session"))
    registry.register(_descriptor("write", "files", read_only_hint=False))
    registry.register(_descriptor("docs", "docs", available=False))
    return registry


def _names(tools: list[BaseTool]) -> list[str]:
    return [tool.name for tool in tools]


# ---------------------------------------------------------------------------
# ToolSelection
# ---------------------------------------------------------------------------


class TestToolSelectionParse:
    def test_none_means_no_opinion(self):
        assert ToolSelection.parse(None) is None

    @pytest.mark.parametrize("value", ["", "  ", " , ", [], ["", " "]])
    def test_empty_means_no_opinion(self, value):
        assert ToolSelection.parse(value) is None

    @pytest.mark.parametrize("value", [False, "none", "NONE", ["none"]])
    def test_disabled(self, value):
        assert ToolSelection.parse(value) is ToolSelection.NONE

    @pytest.mark.parametrize("value", [True, "all", ["all"]])
    def test_everything(self, value):
        assert ToolSelection.parse(value) is ToolSelection.ALL

    def test_string_is_split_on_commas(self):
        assert ToolSelection.parse("files, session") == ToolSelection.of("files", "session")

    def test_list_of_tokens(self):
        assert ToolSelection.parse(["files", "btw_tool_x"]) == ToolSelection.of(
            "files", "btw_tool_x"
        )

    def test_selection_passes_through(self):
        selection = ToolSelection.of("files")
        assert ToolSelection.parse(selection) is selection

    @pytest.mark.parametrize("value", [42, ["files", 3]])
    def test_wrong_type_raises(self, value):
        with pytest.raises(TypeError):
            ToolSelection.parse(value)


# ---------------------------------------------------------------------------
# ToolRegistry
# ---------------------------------------------------------------------------


class TestToolRegistry:
    def test_duplicate_name_raises(self, registry: ToolRegistry):
        with pytest.raises(DuplicateNameError, match="list"):
            registry.register(_descriptor("list", "other"))

    def test_list_all_in_registration_order(self, registry: ToolRegistry):
        assert [d.name for d in registry.list_all()] == [
            "list",
            "platform",
            "write",
            "docs",
        ]
        assert registry.list_all() == registry.list_all()

    def test_select_none(self, registry: ToolRegistry):
        assert registry.resolve_selection(ToolSelection.NONE) == []

    def test_select_all_skips_unavailable(self, registry: ToolRegistry):
        assert _names(registry.resolve_selection(ToolSelection.ALL)) == [
            "list",
            "platform",
            "write",
        ]

    def test_missing_selection_means_all(self, registry: ToolRegistry):
        assert _names(registry.resolve_selection(None)) == ["list", "platform", "write"]

    def test_select_group(self, registry: ToolRegistry):
        tools = registry.resolve_selection(ToolSelection.of("files"))
        assert _names(tools) == ["list", "write"]

    def test_registration_order_not_token_order(self, registry: ToolRegistry):
        tools = registry.resolve_selection(ToolSelection.of("write", "platform"))
        assert _names(tools) == ["platform", "write"]

    def test_name_and_group_tokens_union(self, registry: ToolRegistry):
        tools = registry.resolve_selection(ToolSelection.of("session", "write"))
        assert _names(tools) == ["platform", "write"]

    def test_unknown_tokens_are_ignored(self, registry: ToolRegistry):
        tools = registry.resolve_selection(ToolSelection.of("files", "ide", "nope"))
        assert _names(tools) == ["list", "write"]

    def test_unavailable_tool_selected_by_name(self, registry: ToolRegistry):
        assert registry.resolve_selection(ToolSelection.of("docs")) == []

    def test_annotations_preserved_on_handles(self, registry: ToolRegistry):
        tools = {t.name: t for t in registry.resolve_selection(ToolSelection.ALL)}
        assert tool_annotations(tools["list"]).read_only_hint is True
        assert tool_annotations(tools["write"]).read_only_hint is False
        assert tool_annotations(tools["platform"]).read_only_hint is None

    def test_describe(self, registry: ToolRegistry):
        rows = registry.describe()
        assert [row["name"] for row in rows] == ["list", "platform", "write"]
        assert rows[0] == {
            "group": "files",
            "name": "list",
            "description": "The list tool.",
            "title": "List",
            "is_read_only": True,
            "is_open_world": None,
        }


class TestBuiltinRegistry:
    def test_builtin_tools_registered(self):
        registry = get_tool_registry()
        assert registry.groups() == ["files", "session"]
        assert "btw_tool_files_read_text_file" in registry

    def test_registry_is_a_singleton(self):
        assert get_tool_registry() is get_tool_registry()

    def test_btw_tools_by_group(self):
        names = _names(btw_tools("session"))
        assert names == [
            "btw_tool_session_platform_info",
            "btw_tool_session_package_info",
        ]

    def test_btw_tools_all(self):
        assert len(btw_tools()) == len(get_tool_registry())

    def test_write_tool_is_not_read_only(self):
        (tool,) = btw_tools("btw_tool_files_write_text_file")
        annotations = tool_annotations(tool)
        assert annotations.read_only_hint is False
        assert annotations.idempotent_hint is True
        assert annotations.open_world_hint is False

from __future__ import annotations

import pytest

from ds_mcp.tools import ToolDispatchError, ToolRegistry, ToolSpec, json_content
from ds_mcp.tools.arguments import ComponentIdArguments, NoArguments


def _spec(name: str) -> ToolSpec:
    return ToolSpec(
        name=name,
        description=f"{name} tool",
        arguments=NoArguments,
        handler=lambda _: json_content({"tool": name}),
    )


def test_registry_keeps_deterministic_registration_order() -> None:
    registry = ToolRegistry()
    registry.register(_spec("beta"))
    registry.register(_spec("alpha"))

    assert registry.names() == ("beta", "alpha")
    assert [tool["name"] for tool in registry.describe()] == ["beta", "alpha"]


def test_registry_runs_validated_arguments() -> None:
    registry = ToolRegistry()
    registry.register(
        ToolSpec(
            name="echo",
            description="Echo the id.",
            arguments=ComponentIdArguments,
            handler=lambda arguments: json_content({"id": arguments.id}),
        )
    )

    parsed = registry.parse_arguments("echo", {"id": "atoms/button", "ignored": 1})
    result = registry.run("echo", parsed)

    assert result == [{"type": "text", "text": '{\n  "id": "atoms/button"\n}'}]


def test_unknown_tool_raises_dispatch_error() -> None:
    registry = ToolRegistry()

    with pytest.raises(ToolDispatchError) as excinfo:
        registry.parse_arguments("nope", {})
    with pytest.raises(ToolDispatchError):
        registry.run("nope", NoArguments())

    assert excinfo.value.code == "UNKNOWN_TOOL"
    assert excinfo.value.message == "Unknown tool: nope"


def test_invalid_arguments_name_the_field() -> None:
    registry = ToolRegistry()
    registry.register(
        ToolSpec(
            name="echo",
            description="Echo the id.",
            arguments=ComponentIdArguments,
            handler=lambda arguments: json_content({"id": arguments.id}),
        )
    )

    with pytest.raises(ToolDispatchError) as excinfo:
        registry.parse_arguments("echo", {})

    assert excinfo.value.code == "INVALID_PARAMS"
    assert excinfo.value.message.startswith("Invalid arguments for echo: id: ")

"""Deterministic tool registration and argument validation."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

ContentBlock = dict[str, str]
ToolHandler = Callable[[Any], list[ContentBlock]]


@dataclass(slots=True, frozen=True)
class ToolDispatchError(Exception):
    """Represents deterministic tool dispatch failures."""

    code: str
    message: str


@dataclass(slots=True, frozen=True)
class ToolSpec:
    """One catalogue row: name, description, argument model and handler."""

    name: str
    description: str
    arguments: type[BaseModel]
    handler: ToolHandler

    def describe(self) -> dict[str, object]:
        """Return the tools/list descriptor."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": input_schema(self.arguments),
        }


@dataclass(slots=True)
class ToolRegistry:
    """In-memory tool registry preserving deterministic insertion order."""

    _specs: dict[str, ToolSpec] = field(default_factory=dict)

    def register(self, spec: ToolSpec) -> None:
        """Register a tool spec under its name."""
        self._specs[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        """Return a tool spec by name."""
        return self._specs.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered tool names in deterministic order."""
        return tuple(self._specs.keys())

    def describe(self) -> list[dict[str, object]]:
        """Return descriptors for every registered tool."""
        return [spec.describe() for spec in self._specs.values()]

    def parse_arguments(self, name: str, arguments: dict[str, object]) -> BaseModel:
        """Validate raw arguments against the named tool's model."""
        spec = self._require(name)
        try:
            return spec.arguments.model_validate(arguments)
        except ValidationError as error:
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message=format_validation_error(name, error),
            )

    def run(self, name: str, arguments: BaseModel) -> list[ContentBlock]:
        """Run the named tool's handler on already-validated arguments."""
        return self._require(name).handler(arguments)

    def _require(self, name: str) -> ToolSpec:
        spec = self.get(name)
        if spec is None:
            raise ToolDispatchError(code="UNKNOWN_TOOL", message=f"Unknown tool: {name}")
        return spec


def input_schema(model: type[BaseModel]) -> dict[str, object]:
    """JSON schema for a model with pydantic's ``title`` annotations removed."""
    return _strip_titles(model.model_json_schema())


def format_validation_error(tool_name: str, error: ValidationError) -> str:
    """Collapse pydantic errors into one line per offending field."""
    details: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        details.append(f"{location}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(details)


def text_block(text: str) -> ContentBlock:
    """Plain text content block."""
    return {"type": "text", "text": text}


def json_content(payload: object) -> list[ContentBlock]:
    """Single text block holding pretty-printed JSON."""
    return [text_block(json.dumps(payload, indent=2))]


def _strip_titles(node: Any) -> Any:
    if isinstance(node, dict):
        return {key: _strip_titles(value) for key, value in node.items() if key != "title"}
    if isinstance(node, list):
        return [_strip_titles(item) for item in node]
    return node

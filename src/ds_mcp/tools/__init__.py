"""MCP tool interfaces and registrations."""

from .builtin import register_builtin_tools
from .registry import (
    ContentBlock,
    ToolDispatchError,
    ToolHandler,
    ToolRegistry,
    ToolSpec,
    json_content,
    text_block,
)

__all__ = [
    "ContentBlock",
    "ToolDispatchError",
    "ToolHandler",
    "ToolRegistry",
    "ToolSpec",
    "json_content",
    "register_builtin_tools",
    "text_block",
]

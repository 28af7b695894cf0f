"""Argument models for every tool; their JSON schema is the advertised inputSchema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ds_mcp.config import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT, MIN_SEARCH_LIMIT
from ds_mcp.docs import Framework
from ds_mcp.index import ComponentCategory


class ToolArguments(BaseModel):
    """Strict base: no string-to-number or number-to-bool coercion; unknown keys dropped."""

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)


class NoArguments(ToolArguments):
    pass


class ListComponentsArguments(ToolArguments):
    category: ComponentCategory | None = Field(default=None, description="Optional filter.")


class ComponentIdArguments(ToolArguments):
    id: str = Field(
        min_length=1,
        description="Component id (e.g., 'atoms/button', 'molecules/card').",
    )


class SearchArguments(ToolArguments):
    query: str = Field(min_length=1)
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=MIN_SEARCH_LIMIT, le=MAX_SEARCH_LIMIT)
    include_source: bool = Field(
        default=False,
        alias="includeSource",
        description="If true, searches within file contents too (slower).",
    )


class StoryNameArguments(ToolArguments):
    name: str = Field(min_length=1, description="Story name, e.g. 'Card' for Card.stories.tsx.")


class SuggestStoryArguments(ToolArguments):
    component_id: str = Field(min_length=1, alias="componentId")


class InstallationArguments(ToolArguments):
    framework: Framework = Field(default="general", description="The framework you're using.")

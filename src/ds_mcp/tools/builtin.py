"""Built-in design-system tools and their catalogue entries."""

from __future__ import annotations

import json

from ds_mcp.config import RepoPaths
from ds_mcp.docs import (
    THEME_OVERVIEW,
    format_component_docs,
    installation_instructions,
    parse_component_docs,
    parse_design_tokens,
)
from ds_mcp.index import (
    best_guess_story_name,
    find_component_by_id,
    find_story_by_name,
    list_components,
    list_stories,
    read_text_file,
    search,
)
from ds_mcp.tools.arguments import (
    ComponentIdArguments,
    InstallationArguments,
    ListComponentsArguments,
    NoArguments,
    SearchArguments,
    StoryNameArguments,
    SuggestStoryArguments,
)
from ds_mcp.tools.registry import (
    ContentBlock,
    ToolHandler,
    ToolRegistry,
    ToolSpec,
    json_content,
    text_block,
)

COMPONENT_NOT_FOUND_HINT = "Use list_components to see valid ids."
STORY_NOT_FOUND_HINT = "Use list_stories to see valid names."

USAGE_GUIDELINES_PREAMBLE = (
    "CRITICAL: Components do NOT accept className or style props. Use variants and props only.\n"
    "\n"
    "This design system enforces strict styling through class-variance-authority (cva). "
    "For layout concerns (width, margins, grid positioning), use wrapper elements.\n"
    "\n"
    "Below are the complete usage guidelines:"
)


def register_builtin_tools(registry: ToolRegistry, repo_paths: RepoPaths) -> None:
    """Register the full tool catalogue in advertised order."""
    specs = (
        ToolSpec(
            name="list_components",
            description=(
                "List all design system component source files (atoms/molecules/organisms)."
            ),
            arguments=ListComponentsArguments,
            handler=_list_components_handler(repo_paths),
        ),
        ToolSpec(
            name="get_component_source",
            description=(
                "Fetch the source for a design system component by id (e.g. 'molecules/card')."
            ),
            arguments=ComponentIdArguments,
            handler=_get_component_source_handler(repo_paths),
        ),
        ToolSpec(
            name="search",
            description=(
                "Search component ids (and optionally component source) and story names "
                "for a query string."
            ),
            arguments=SearchArguments,
            handler=_search_handler(repo_paths),
        ),
        ToolSpec(
            name="list_stories",
            description="List Storybook story files in apps/storybook/stories.",
            arguments=NoArguments,
            handler=_list_stories_handler(repo_paths),
        ),
        ToolSpec(
            name="get_story_source",
            description=(
                "Fetch a Storybook story source by story name "
                "(e.g. 'Card' for Card.stories.tsx)."
            ),
            arguments=StoryNameArguments,
            handler=_get_story_source_handler(repo_paths),
        ),
        ToolSpec(
            name="suggest_story_for_component",
            description=(
                "Best-guess the Storybook story name for a component id "
                "(e.g. molecules/card -> Card)."
            ),
            arguments=SuggestStoryArguments,
            handler=_suggest_story_handler(repo_paths),
        ),
        ToolSpec(
            name="get_theme",
            description=(
                "Get the design system theme tokens for light/dark mode, parsed from globals.css."
            ),
            arguments=NoArguments,
            handler=_get_theme_handler(repo_paths),
        ),
        ToolSpec(
            name="get_usage_guidelines",
            description=(
                "Get the usage guidelines for the design system (agents.md). "
                "Components do NOT accept className - use variants and props only."
            ),
            arguments=NoArguments,
            handler=_get_usage_guidelines_handler(repo_paths),
        ),
        ToolSpec(
            name="installation",
            description=(
                "Get installation and setup instructions for using the design system in a project."
            ),
            arguments=InstallationArguments,
            handler=_installation_handler(),
        ),
        ToolSpec(
            name="get_component_docs",
            description=(
                "Get documentation for a component including props, variants and a usage "
                "example from its story. Components do NOT accept className."
            ),
            arguments=ComponentIdArguments,
            handler=_get_component_docs_handler(repo_paths),
        ),
    )
    for spec in specs:
        registry.register(spec)


def _component_not_found(component_id: str) -> dict[str, object]:
    return {"error": f"Component not found: {component_id}", "hint": COMPONENT_NOT_FOUND_HINT}


def _list_components_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: ListComponentsArguments) -> list[ContentBlock]:
        components = list_components(repo_paths)
        if arguments.category is not None:
            components = [entry for entry in components if entry.category == arguments.category]
        return json_content(
            {
                "repoPaths": repo_paths.to_public_dict(),
                "components": [entry.to_dict() for entry in components],
            }
        )

    return handler


def _get_component_source_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: ComponentIdArguments) -> list[ContentBlock]:
        component = find_component_by_id(repo_paths, arguments.id)
        if component is None:
            return json_content(_component_not_found(arguments.id))
        source = read_text_file(component.file_path)
        return json_content({"component": component.to_dict(), "source": source})

    return handler


def _search_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: SearchArguments) -> list[ContentBlock]:
        hits = search(
            repo_paths,
            query=arguments.query,
            limit=arguments.limit,
            include_source=arguments.include_source,
        )
        return json_content(
            {
                "query": arguments.query,
                "limit": arguments.limit,
                "hits": [hit.to_dict() for hit in hits],
            }
        )

    return handler


def _list_stories_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(_: NoArguments) -> list[ContentBlock]:
        stories = list_stories(repo_paths)
        return json_content(
            {
                "repoPaths": repo_paths.to_public_dict(),
                "stories": [story.to_dict() for story in stories],
            }
        )

    return handler


def _get_story_source_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: StoryNameArguments) -> list[ContentBlock]:
        story = find_story_by_name(repo_paths, arguments.name)
        if story is None:
            return json_content(
                {"error": f"Story not found: {arguments.name}", "hint": STORY_NOT_FOUND_HINT}
            )
        source = read_text_file(story.file_path)
        return json_content({"story": story.to_dict(), "source": source})

    return handler


def _suggest_story_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: SuggestStoryArguments) -> list[ContentBlock]:
        component = find_component_by_id(repo_paths, arguments.component_id)
        if component is None:
            return json_content(_component_not_found(arguments.component_id))
        suggested = best_guess_story_name(component.file_stem)
        story = find_story_by_name(repo_paths, suggested)
        return json_content(
            {
                "componentId": component.id,
                "suggestedStoryName": suggested,
                "exists": story is not None,
                "story": story.to_dict() if story is not None else None,
            }
        )

    return handler


def _get_theme_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(_: NoArguments) -> list[ContentBlock]:
        tokens = parse_design_tokens(read_text_file(repo_paths.globals_styles_path))
        return [
            text_block(THEME_OVERVIEW),
            text_block(json.dumps(tokens.to_dict(), indent=2)),
        ]

    return handler


def _get_usage_guidelines_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(_: NoArguments) -> list[ContentBlock]:
        agents_md = read_text_file(repo_paths.agents_md_path)
        return [text_block(USAGE_GUIDELINES_PREAMBLE), text_block(agents_md)]

    return handler


def _installation_handler() -> ToolHandler:
    def handler(arguments: InstallationArguments) -> list[ContentBlock]:
        return json_content(installation_instructions(arguments.framework))

    return handler


def _get_component_docs_handler(repo_paths: RepoPaths) -> ToolHandler:
    def handler(arguments: ComponentIdArguments) -> list[ContentBlock]:
        components = list_components(repo_paths)
        wanted = arguments.id.lower()
        component = next((entry for entry in components if entry.id.lower() == wanted), None)
        if component is None:
            payload = _component_not_found(arguments.id)
            payload["availableComponents"] = [entry.id for entry in components]
            return json_content(payload)

        docs = parse_component_docs(read_text_file(component.file_path), component.id)
        story = find_story_by_name(repo_paths, best_guess_story_name(component.file_stem))
        story_source = read_text_file(story.file_path) if story is not None else None

        summary = {
            "componentId": component.id,
            "category": component.category,
            "exports": list(docs.exports),
            "variants": [group.to_dict() for group in docs.variants],
            "props": [props.to_dict() for props in docs.props],
            "hasStory": story is not None,
            "storyName": story.name if story is not None else None,
        }
        return [
            text_block(format_component_docs(docs, story_source)),
            text_block(json.dumps(summary, indent=2)),
        ]

    return handler

"""Storybook story index built from the stories tree."""

from __future__ import annotations

from ds_mcp.config import RepoPaths
from ds_mcp.index.components import collation_key
from ds_mcp.index.models import StoryEntry
from ds_mcp.index.walker import path_exists, walk_files

STORY_SUFFIX = ".stories.tsx"
STORY_EXTENSIONS = (".ts", ".tsx")


def list_stories(repo_paths: RepoPaths) -> list[StoryEntry]:
    """Return every ``*.stories.tsx`` file, sorted by story name."""
    base_dir = repo_paths.stories_dir
    if not path_exists(base_dir):
        return []

    # no ignore predicate: nested story folders are listed too
    files = walk_files(base_dir, include_extensions=STORY_EXTENSIONS)

    ranked: list[tuple[str, StoryEntry]] = []
    for file in files:
        if not file.rel_path.endswith(STORY_SUFFIX):
            continue
        filename = file.abs_path.name
        ranked.append(
            (
                file.rel_path,
                StoryEntry(
                    name=filename[: -len(STORY_SUFFIX)],
                    filename=filename,
                    file_path=file.abs_path,
                ),
            )
        )
    ranked.sort(key=lambda item: (collation_key(item[1].name), item[0]))
    return [entry for _, entry in ranked]


def find_story_by_name(repo_paths: RepoPaths, name: str) -> StoryEntry | None:
    """Return the first story, in index order, whose name matches case-insensitively."""
    wanted = name.lower()
    for story in list_stories(repo_paths):
        if story.name.lower() == wanted:
            return story
    return None

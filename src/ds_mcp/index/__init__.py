"""Component/story indexing and search package."""

from .components import (
    CATEGORY_DIRS,
    best_guess_story_name,
    find_component_by_id,
    list_components,
)
from .models import ComponentCategory, ComponentEntry, StoryEntry, WalkEntry
from .search import ComponentHit, SearchHit, StoryHit, search
from .stories import find_story_by_name, list_stories
from .walker import path_exists, read_text_file, walk_files

__all__ = [
    "CATEGORY_DIRS",
    "ComponentCategory",
    "ComponentEntry",
    "ComponentHit",
    "SearchHit",
    "StoryEntry",
    "StoryHit",
    "WalkEntry",
    "best_guess_story_name",
    "find_component_by_id",
    "find_story_by_name",
    "list_components",
    "list_stories",
    "path_exists",
    "read_text_file",
    "search",
    "walk_files",
]

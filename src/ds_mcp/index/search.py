"""Bounded substring search across the component and story indices."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ds_mcp.config import RepoPaths
from ds_mcp.index.components import list_components
from ds_mcp.index.stories import list_stories
from ds_mcp.index.walker import read_text_file


@dataclass(slots=True, frozen=True)
class ComponentHit:
    """Component matched by id/stem or by source text."""

    id: str
    file_path: Path
    match: Literal["id", "source"]
    kind: Literal["component"] = "component"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "id": self.id,
            "filePath": str(self.file_path),
            "match": self.match,
        }


@dataclass(slots=True, frozen=True)
class StoryHit:
    """Story matched by name."""

    name: str
    file_path: Path
    match: Literal["name"] = "name"
    kind: Literal["story"] = "story"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "name": self.name,
            "filePath": str(self.file_path),
            "match": self.match,
        }


SearchHit = ComponentHit | StoryHit


def search(
    repo_paths: RepoPaths,
    query: str,
    limit: int,
    include_source: bool = False,
) -> list[SearchHit]:
    """Return at most ``limit`` hits: components first, then stories.

    Matching is case-insensitive substring containment. With ``include_source``
    each component's file is read and may add a second ``source`` hit after
    its ``id`` hit.
    """
    if limit < 1:
        return []
    needle = query.lower()
    hits: list[SearchHit] = []

    for component in list_components(repo_paths):
        if needle in component.id.lower() or needle in component.file_stem.lower():
            hits.append(ComponentHit(id=component.id, file_path=component.file_path, match="id"))
            if len(hits) >= limit:
                return hits
        if include_source:
            source = read_text_file(component.file_path)
            if needle in source.lower():
                hits.append(
                    ComponentHit(id=component.id, file_path=component.file_path, match="source")
                )
                if len(hits) >= limit:
                    return hits

    for story in list_stories(repo_paths):
        if needle in story.name.lower():
            hits.append(StoryHit(name=story.name, file_path=story.file_path))
            if len(hits) >= limit:
                break
    return hits

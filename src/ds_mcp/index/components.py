"""Design-system component index built from the components tree."""

from __future__ import annotations

import re
from typing import cast

from ds_mcp.config import RepoPaths
from ds_mcp.index.models import ComponentCategory, ComponentEntry
from ds_mcp.index.walker import path_exists, walk_files

CATEGORY_DIRS: tuple[ComponentCategory, ...] = ("atoms", "molecules", "organisms")
COMPONENT_EXTENSIONS = (".ts", ".tsx")

_SOURCE_SUFFIX_RE = re.compile(r"\.(ts|tsx)$")
_STEM_SEPARATOR_RE = re.compile(r"[-_]+")


def collation_key(value: str) -> tuple[str, str]:
    """Case-insensitive primary order with the raw string as tie-breaker."""
    return (value.casefold(), value)


def list_components(repo_paths: RepoPaths) -> list[ComponentEntry]:
    """Return every component under atoms/molecules/organisms, sorted by id."""
    base_dir = repo_paths.components_dir
    if not path_exists(base_dir):
        return []

    files = walk_files(
        base_dir,
        include_extensions=COMPONENT_EXTENSIONS,
        ignore=_ignore_component_path,
    )

    candidates: list[tuple[str, ComponentEntry]] = []
    for file in files:
        parts = file.rel_path.split("/")
        category = parts[0]
        if len(parts) < 2 or category not in CATEGORY_DIRS:
            continue
        stem = _SOURCE_SUFFIX_RE.sub("", parts[-1])
        candidates.append(
            (
                file.rel_path,
                ComponentEntry(
                    id=f"{category}/{stem}",
                    category=cast(ComponentCategory, category),
                    file_stem=stem,
                    file_path=file.abs_path,
                ),
            )
        )

    candidates.sort(key=lambda item: (collation_key(item[1].id), item[0]))
    output: list[ComponentEntry] = []
    seen: set[str] = set()
    for _, entry in candidates:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        output.append(entry)
    return output


def find_component_by_id(repo_paths: RepoPaths, component_id: str) -> ComponentEntry | None:
    """Case-insensitive exact id lookup over a fresh index."""
    wanted = component_id.lower()
    for entry in list_components(repo_paths):
        if entry.id.lower() == wanted:
            return entry
    return None


def best_guess_story_name(file_stem: str) -> str:
    """kebab-case / snake_case stem to PascalCase, e.g. ``split-button`` -> ``SplitButton``."""
    parts = [part for part in _STEM_SEPARATOR_RE.split(file_stem) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def _ignore_component_path(rel_path: str) -> bool:
    parts = rel_path.split("/")
    # re-export barrels
    if parts[-1] == "index.ts":
        return True
    # ui/ is surfaced through the category folders
    return parts[0] == "ui"

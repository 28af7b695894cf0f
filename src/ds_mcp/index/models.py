"""Typed index entries for components and stories."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ComponentCategory = Literal["atoms", "molecules", "organisms"]


@dataclass(slots=True, frozen=True)
class WalkEntry:
    """One file found by the walker; ``rel_path`` uses ``/`` separators."""

    abs_path: Path
    rel_path: str


@dataclass(slots=True, frozen=True)
class ComponentEntry:
    """Design-system component source file, e.g. ``atoms/button``."""

    id: str
    category: ComponentCategory
    file_stem: str
    file_path: Path

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "category": self.category,
            "fileStem": self.file_stem,
            "filePath": str(self.file_path),
        }


@dataclass(slots=True, frozen=True)
class StoryEntry:
    """Storybook story file, e.g. ``Card`` for ``Card.stories.tsx``."""

    name: str
    filename: str
    file_path: Path

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "filename": self.filename,
            "filePath": str(self.file_path),
        }

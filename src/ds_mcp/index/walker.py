"""Recursive file walking with extension filters and subtree pruning."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from ds_mcp.index.models import WalkEntry

IgnorePredicate = Callable[[str], bool]


def path_exists(path: Path) -> bool:
    """Return True when ``path`` can be stat'ed."""
    try:
        path.stat()
    except OSError:
        return False
    return True


def read_text_file(path: Path) -> str:
    """Read a text file as UTF-8, replacing undecodable bytes."""
    return path.read_text(encoding="utf-8", errors="replace")


def walk_files(
    base_dir: Path,
    include_extensions: Iterable[str] = (),
    ignore: IgnorePredicate | None = None,
) -> list[WalkEntry]:
    """Walk ``base_dir`` depth-first in name order.

    ``ignore`` receives each entry's relative path before anything else happens
    to it; an ignored directory is never descended into. Files are kept only
    when their suffix is in ``include_extensions`` (an empty set keeps all).
    Callers must check that ``base_dir`` exists: a missing root raises.
    """
    extensions = frozenset(include_extensions)
    output: list[WalkEntry] = []

    def walk(directory: Path) -> None:
        with os.scandir(directory) as entries:
            ordered_entries = sorted(entries, key=lambda item: item.name)
        for entry in ordered_entries:
            abs_path = Path(entry.path)
            rel_path = abs_path.relative_to(base_dir).as_posix()
            if ignore is not None and ignore(rel_path):
                continue
            if entry.is_dir():
                walk(abs_path)
                continue
            if extensions and abs_path.suffix not in extensions:
                continue
            output.append(WalkEntry(abs_path=abs_path, rel_path=rel_path))

    walk(base_dir)
    return output

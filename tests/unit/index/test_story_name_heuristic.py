from __future__ import annotations

import pytest

from ds_mcp.index import best_guess_story_name


@pytest.mark.parametrize(
    ("stem", "expected"),
    [
        ("split-button", "SplitButton"),
        ("ai_chat", "AiChat"),
        ("button", "Button"),
        ("data--table__row", "DataTableRow"),
        ("-leading-dash", "LeadingDash"),
        ("iconButton", "IconButton"),
        ("", ""),
    ],
)
def test_best_guess_story_name(stem: str, expected: str) -> None:
    assert best_guess_story_name(stem) == expected

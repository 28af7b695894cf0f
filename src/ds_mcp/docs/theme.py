"""CSS custom-property extraction from the design-system globals stylesheet."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_ROOT_BLOCK_RE = re.compile(r":root\s*\{([^}]+)\}")
_DARK_BLOCK_RE = re.compile(r"\.dark\s*\{([^}]+)\}")
_THEME_BLOCK_RE = re.compile(r"@theme\s+inline\s*\{([^}]+)\}")
_CUSTOM_PROPERTY_RE = re.compile(r"--([a-z0-9-]+):\s*([^;]+);", re.IGNORECASE)

THEME_OVERVIEW = """Design System Theme Tokens

Use these semantic tokens for consistent theming.
The design system uses Tailwind CSS v4 with CSS variables.

Key token categories:
- colors: background, foreground, primary, secondary, muted, accent, destructive,
  success, warning, info
- semantic variants: each color has a foreground variant (e.g., primary-foreground)
  for text on that background
- chart colors: chart-1 through chart-5 for data visualization
- sidebar: sidebar-specific colors for app shells
- radius: border radius tokens (sm, md, lg, xl)

Dark mode is handled automatically via .dark class selector."""


@dataclass(slots=True)
class DesignTokens:
    light: dict[str, str] = field(default_factory=dict)
    dark: dict[str, str] = field(default_factory=dict)
    tailwind_theme: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "light": dict(self.light),
            "dark": dict(self.dark),
            "tailwindTheme": dict(self.tailwind_theme),
        }


def parse_design_tokens(css_source: str) -> DesignTokens:
    """Collect ``--name: value;`` pairs from the first :root, .dark and @theme inline blocks."""
    return DesignTokens(
        light=_block_properties(_ROOT_BLOCK_RE, css_source),
        dark=_block_properties(_DARK_BLOCK_RE, css_source),
        tailwind_theme=_block_properties(_THEME_BLOCK_RE, css_source),
    )


def _block_properties(block_pattern: re.Pattern[str], css_source: str) -> dict[str, str]:
    block = block_pattern.search(css_source)
    if block is None:
        return {}
    return {
        match.group(1): match.group(2).strip()
        for match in _CUSTOM_PROPERTY_RE.finditer(block.group(1))
    }

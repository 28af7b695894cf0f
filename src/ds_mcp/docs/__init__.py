"""Agent-facing documentation derived from design-system sources."""

from .component_docs import (
    ComponentDocs,
    PropField,
    PropsInterface,
    VariantGroup,
    format_component_docs,
    parse_component_docs,
)
from .installation import Framework, installation_instructions
from .theme import THEME_OVERVIEW, DesignTokens, parse_design_tokens

__all__ = [
    "ComponentDocs",
    "DesignTokens",
    "Framework",
    "PropField",
    "PropsInterface",
    "THEME_OVERVIEW",
    "VariantGroup",
    "format_component_docs",
    "installation_instructions",
    "parse_component_docs",
    "parse_design_tokens",
]

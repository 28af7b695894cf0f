"""Lexical extraction of exports, props and cva variants from component source."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_FORWARD_REF_EXPORT_RE = re.compile(
    r"(?:export\s+)?const\s+(\w+)\s*=\s*(?:React\.)?forwardRef"
)
_PLAIN_EXPORT_RE = re.compile(
    r"export\s+(?:function|const)\s+(\w+)\b(?!\s*=\s*(?:React\.)?forwardRef)"
)
_PROPS_TYPE_RE = re.compile(r"type\s+(\w+Props)\s*=\s*[^&]*&\s*\{([^}]+)\}", re.DOTALL)
_JSDOC_LINE_RE = re.compile(r"/\*\*\s*(.+?)\s*\*/")
_PROP_LINE_RE = re.compile(r"^\s*(\w+)(\?)?:\s*(.+?);?\s*$")
_CVA_RE = re.compile(
    r"const\s+(\w+Variants)\s*=\s*cva\s*\(\s*"
    r"(?:\"[^\"]*\"|'[^']*'|`[^`]*`|\[[^\]]*\])\s*,\s*"
    r"\{[\s\S]*?variants:\s*\{([\s\S]*?)\}\s*,\s*defaultVariants"
)
_VARIANT_CATEGORY_RE = re.compile(r"^\s{6}(\w+):\s*\{", re.MULTILINE)
_VARIANT_OPTION_RE = re.compile(r"^\s+['\"]?(\w+(?:-\w+)*)['\"]?:", re.MULTILINE)
_STORY_RENDER_RE = re.compile(
    r"export\s+const\s+\w+:\s*Story\s*=\s*\{[\s\S]*?"
    r"render:\s*\([^)]*\)\s*=>\s*\(([\s\S]*?)\),?\s*\}"
)


@dataclass(slots=True, frozen=True)
class PropField:
    name: str
    type: str
    optional: bool
    description: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "name": self.name,
            "type": self.type,
            "optional": self.optional,
        }
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(slots=True, frozen=True)
class PropsInterface:
    name: str
    interface: str
    properties: tuple[PropField, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "interface": self.interface,
            "properties": [prop.to_dict() for prop in self.properties],
        }


@dataclass(slots=True, frozen=True)
class VariantGroup:
    component: str
    variant_name: str
    options: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "component": self.component,
            "variantName": self.variant_name,
            "options": list(self.options),
        }


@dataclass(slots=True)
class ComponentDocs:
    """Structured documentation recovered from one component file."""

    id: str
    exports: list[str] = field(default_factory=list)
    props: list[PropsInterface] = field(default_factory=list)
    variants: list[VariantGroup] = field(default_factory=list)
    has_class_name: bool = False


def parse_component_docs(source: str, component_id: str) -> ComponentDocs:
    """Extract exports, props types and cva variants with deterministic regexes."""
    docs = ComponentDocs(id=component_id)

    for match in _FORWARD_REF_EXPORT_RE.finditer(source):
        docs.exports.append(match.group(1))
    for match in _PLAIN_EXPORT_RE.finditer(source):
        name = match.group(1)
        if "Variants" in name or name in docs.exports:
            continue
        docs.exports.append(name)

    for match in _PROPS_TYPE_RE.finditer(source):
        type_name, body = match.group(1), match.group(2)
        properties = _parse_props_body(body)
        if properties:
            docs.props.append(
                PropsInterface(
                    name=type_name.removesuffix("Props"),
                    interface=type_name,
                    properties=tuple(properties),
                )
            )

    docs.variants.extend(_parse_cva_variants(source))
    docs.has_class_name = "className?:" in source or "className:" in source
    return docs


def _parse_props_body(body: str) -> list[PropField]:
    properties: list[PropField] = []
    pending_comment = ""
    for line in body.split("\n"):
        comment = _JSDOC_LINE_RE.search(line)
        if comment is not None:
            pending_comment = comment.group(1)
            continue
        prop = _PROP_LINE_RE.match(line)
        if prop is None:
            continue
        name = prop.group(1)
        if name != "children":
            properties.append(
                PropField(
                    name=name,
                    type=prop.group(3).strip().removesuffix(";") or "unknown",
                    optional=prop.group(2) == "?",
                    description=pending_comment or None,
                )
            )
        pending_comment = ""
    return properties


def _parse_cva_variants(source: str) -> list[VariantGroup]:
    cva = _CVA_RE.search(source)
    if cva is None:
        return []
    variants_name, block = cva.group(1), cva.group(2)
    component = variants_name.replace("Variants", "")

    groups: list[VariantGroup] = []
    for category in _VARIANT_CATEGORY_RE.finditer(block):
        category_name = category.group(1)
        content = re.search(
            rf"{category_name}:\s*\{{([\s\S]*?)^\s{{6}}\}}",
            block,
            re.MULTILINE,
        )
        if content is None:
            continue
        options = tuple(option.group(1) for option in _VARIANT_OPTION_RE.finditer(content.group(1)))
        if options:
            groups.append(
                VariantGroup(component=component, variant_name=category_name, options=options)
            )
    return groups


def format_component_docs(docs: ComponentDocs, story_source: str | None) -> str:
    """Render agent-facing markdown for a parsed component."""
    main_export = docs.exports[0] if docs.exports else None
    lines = [f"# {main_export or docs.id} Component", ""]

    lines.append("## CRITICAL: No className Prop")
    lines.append(
        "This component does NOT accept `className` or `style` props. "
        "Use variants and props only."
    )
    lines.append("")

    if docs.exports:
        lines.append("## Exports")
        lines.extend(f"- `{name}`" for name in docs.exports)
        lines.append("")

    if docs.variants:
        lines.append("## Available Variants")
        for group in docs.variants:
            lines.append(f"### {group.component} - {group.variant_name}")
            lines.append("Options: " + ", ".join(f"`{option}`" for option in group.options))
            lines.append("")

    if docs.props:
        lines.append("## Props")
        for props in docs.props:
            lines.append(f"### {props.interface}")
            lines.append("| Prop | Type | Required | Description |")
            lines.append("|------|------|----------|-------------|")
            for prop in props.properties:
                required = "No" if prop.optional else "Yes"
                description = prop.description or "-"
                lines.append(f"| {prop.name} | `{prop.type}` | {required} | {description} |")
            lines.append("")

    if story_source:
        usage = _STORY_RENDER_RE.search(story_source)
        if usage is not None and usage.group(1).strip():
            lines.append("## Usage Example")
            lines.append("```tsx")
            lines.append(usage.group(1).strip())
            lines.append("```")
            lines.append("")

    if docs.variants:
        tag = main_export or "Component"
        lines.append("## Quick Examples")
        lines.append("```tsx")
        for group in docs.variants[:2]:
            lines.append(f'<{tag} {group.variant_name}="{group.options[0]}">{tag}</{tag}>')
        lines.append("```")

    return "\n".join(lines).rstrip() + "\n"

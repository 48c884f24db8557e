"""
Composer Kernel — Code Generator

Pure function: (snapshot, options) → GeneratedCode
No side effects. No IO. Deterministic: same tree + same options → the same
bytes, whatever edit history produced the tree.

Output is a React component file in one of two dialects:
  tsx — typed (return type annotation)
  jsx — untyped

The element tree is walked pre-order. Each element becomes one tag: its
props in a fixed order, then a className built by the style resolver.
Elements without children self-close. Indentation is depth × indent_width
spaces; lines never end in whitespace; the file ends with one newline.

An element whose kind is not registered aborts generation with
UnknownComponentKind. Nothing partial is ever returned.
"""

from __future__ import annotations

import json
import re
from typing import Any

import chevron

from composer.kernel.registry import ComponentDefinition, ComponentRegistry, default_registry
from composer.kernel.styles import class_name
from composer.kernel.types import (
    DIALECTS,
    STRUCTURAL_PROPS,
    Binding,
    Element,
    GeneratedCode,
    GenerateOptions,
    Snapshot,
)

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

COMPONENT_TEMPLATES: dict[str, str] = {
    "tsx": "{{{header}}}export default function {{{name}}}(): {{{return_type}}} {\n{{{body}}}\n}\n",
    "jsx": "{{{header}}}export default function {{{name}}}() {\n{{{body}}}\n}\n",
}

DEFAULT_COMPONENT_NAME = "Component"

# Characters that can't sit inside a quoted JSX attribute as-is.
_NEEDS_EXPRESSION_RE = re.compile(r'[\x00-\x1f"\\{}&]')
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate(
    snapshot: Snapshot,
    options: GenerateOptions | None = None,
    registry: ComponentRegistry | None = None,
) -> GeneratedCode:
    """
    Render a complete component source file from a snapshot.
    Pure function. Raises UnknownComponentKind for unregistered kinds.
    """
    opts = options or GenerateOptions()
    reg = registry or default_registry()
    if opts.dialect not in DIALECTS:
        raise ValueError(f"unknown dialect {opts.dialect!r}, expected one of {DIALECTS}")

    definitions = _resolve_definitions(snapshot, reg)
    name = component_name(opts.component_name)
    unit = " " * opts.indent_width

    if snapshot.root_id is None:
        body = [f"{unit}return null;"]
    else:
        body = [f"{unit}return ("]
        _emit(snapshot.root_id, 2, snapshot, definitions, unit, body)
        body.append(f"{unit});")

    header = _render_imports(snapshot, definitions, opts) if opts.include_imports else ""
    source = chevron.render(
        COMPONENT_TEMPLATES[opts.dialect],
        {
            "header": header,
            "name": name,
            "return_type": "null" if snapshot.root_id is None else "React.JSX.Element",
            "body": "\n".join(body),
        },
    )
    return GeneratedCode(source=_tidy(source), component_name=name)


def generate_markup(
    snapshot: Snapshot,
    options: GenerateOptions | None = None,
    registry: ComponentRegistry | None = None,
) -> str:
    """Just the element markup, starting at column zero, for copying as a snippet."""
    opts = options or GenerateOptions()
    reg = registry or default_registry()
    definitions = _resolve_definitions(snapshot, reg)
    if snapshot.root_id is None:
        return ""
    lines: list[str] = []
    _emit(snapshot.root_id, 0, snapshot, definitions, " " * opts.indent_width, lines)
    return _tidy("\n".join(lines))


def component_name(raw: str) -> str:
    """
    Turn free text into a valid component identifier.

    "my hero" → "Myhero", "2col" → "Component2col", "" → "Component"
    """
    cleaned = _NON_ALNUM_RE.sub("", raw or "")
    if not cleaned:
        return DEFAULT_COMPONENT_NAME
    if cleaned[0].isdigit():
        return f"{DEFAULT_COMPONENT_NAME}{cleaned}"
    return cleaned[0].upper() + cleaned[1:]


def render_attribute(name: str, value: Any) -> str:
    """One JSX attribute. Strings stay quoted unless they need an expression."""
    if isinstance(value, Binding):
        return f"{name}={{{value.expression}}}"
    if isinstance(value, bool):
        return name if value else f"{name}={{false}}"
    if isinstance(value, (int, float)):
        return f"{name}={{{value!r}}}"
    text = str(value)
    if _NEEDS_EXPRESSION_RE.search(text):
        return f"{name}={{{json.dumps(text, ensure_ascii=False)}}}"
    return f'{name}="{text}"'


def ordered_prop_names(element: Element, definition: ComponentDefinition) -> list[str]:
    """
    Structural props first (key, id, name, type), then the registry's
    default-prop template order, then anything else alphabetically.
    Template props missing from the element are skipped, not defaulted.
    """
    props = element.props
    names = [p for p in STRUCTURAL_PROPS if p in props]
    placed = set(names)
    for template_name in definition.default_props:
        if template_name in props and template_name not in placed:
            names.append(template_name)
            placed.add(template_name)
    names.extend(sorted(p for p in props if p not in placed))
    return names


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _resolve_definitions(snapshot: Snapshot, registry: ComponentRegistry) -> dict[str, ComponentDefinition]:
    """Look up every reachable element's kind before emitting anything."""
    definitions: dict[str, ComponentDefinition] = {}
    if snapshot.root_id is None:
        return definitions
    stack = [snapshot.root_id]
    while stack:
        element = snapshot.elements[stack.pop()]
        if element.kind not in definitions:
            definitions[element.kind] = registry.require(element.kind, element.id)
        stack.extend(reversed(element.children))
    return definitions


def _emit(
    root_id: str,
    base_depth: int,
    snapshot: Snapshot,
    definitions: dict[str, ComponentDefinition],
    unit: str,
    lines: list[str],
) -> None:
    """Pre-order walk with an explicit stack; (None, depth, tag) entries close a tag."""
    stack: list[tuple[str | None, int, str]] = [(root_id, base_depth, "")]
    while stack:
        element_id, depth, closing_tag = stack.pop()
        pad = unit * depth
        if element_id is None:
            lines.append(f"{pad}</{closing_tag}>")
            continue

        element = snapshot.elements[element_id]
        definition = definitions[element.kind]
        attributes = [render_attribute(name, element.props[name]) for name in ordered_prop_names(element, definition)]
        classes = class_name(element.style)
        if classes:
            attributes.append(f'className="{classes}"')
        opening = definition.tag + "".join(f" {a}" for a in attributes)

        if not element.children:
            lines.append(f"{pad}<{opening} />")
            continue

        lines.append(f"{pad}<{opening}>")
        stack.append((None, depth, definition.tag))
        stack.extend((child_id, depth + 1, "") for child_id in reversed(element.children))


def _render_imports(
    snapshot: Snapshot,
    definitions: dict[str, ComponentDefinition],
    opts: GenerateOptions,
) -> str:
    """React import plus one named import per source module, all sorted."""
    by_module: dict[str, set[str]] = {}
    for definition in definitions.values():
        module = definition.module or opts.import_module
        by_module.setdefault(module, set()).add(definition.tag)

    lines = ["import React from 'react';"]
    for module in sorted(by_module):
        tags = ", ".join(sorted(by_module[module]))
        lines.append(f"import {{ {tags} }} from '{module}';")
    return "\n".join(lines) + "\n\n"


def _tidy(source: str) -> str:
    """Strip trailing whitespace from every line and end with exactly one newline."""
    lines = [line.rstrip() for line in source.split("\n")]
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n"

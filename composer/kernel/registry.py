"""
Composer Kernel — Component Registry

Read-only catalog of placeable component kinds. For each kind the registry
knows whether it can hold children, its default props (an ordered template:
the generator emits props in this order), and its default style attributes.

Kind-specific behavior is a table lookup here, never a subclass. The tree
and generator treat every kind the same way.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from composer.kernel.errors import UnknownComponentKind

CATEGORIES: set[str] = {
    "layout",
    "text",
    "buttons",
    "cards",
    "forms",
    "media",
    "navigation",
    "sections",
}


@dataclass(frozen=True)
class ComponentDefinition:
    kind: str
    tag: str
    name: str
    category: str
    container: bool = False
    default_props: dict[str, Any] = field(default_factory=dict)
    default_style: dict[str, str] = field(default_factory=dict)
    module: str | None = None  # import source; None means GenerateOptions.import_module

    def fresh_props(self) -> dict[str, Any]:
        return copy.deepcopy(self.default_props)

    def fresh_style(self) -> dict[str, str]:
        return dict(self.default_style)


class ComponentRegistry:
    """Lookup table of ComponentDefinitions keyed by kind."""

    def __init__(self, definitions: list[ComponentDefinition] | None = None) -> None:
        self._definitions: dict[str, ComponentDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: ComponentDefinition) -> None:
        if definition.category not in CATEGORIES:
            raise ValueError(f"unknown category {definition.category!r} for '{definition.kind}'")
        self._definitions[definition.kind] = definition

    def get(self, kind: str) -> ComponentDefinition | None:
        return self._definitions.get(kind)

    def require(self, kind: str, element_id: str | None = None) -> ComponentDefinition:
        definition = self._definitions.get(kind)
        if definition is None:
            raise UnknownComponentKind(kind, element_id)
        return definition

    def is_container(self, kind: str) -> bool:
        definition = self._definitions.get(kind)
        return definition is not None and definition.container

    def kinds(self) -> list[str]:
        return sorted(self._definitions)

    def by_category(self, category: str) -> list[ComponentDefinition]:
        return [d for kind, d in sorted(self._definitions.items()) if d.category == category]

    def __contains__(self, kind: object) -> bool:
        return kind in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


# ---------------------------------------------------------------------------
# Default catalog
# ---------------------------------------------------------------------------


def _component(
    kind: str,
    tag: str,
    name: str,
    category: str,
    *,
    container: bool = False,
    props: dict[str, Any] | None = None,
    style: dict[str, str] | None = None,
) -> ComponentDefinition:
    return ComponentDefinition(
        kind=kind,
        tag=tag,
        name=name,
        category=category,
        container=container,
        default_props=props or {},
        default_style=style or {},
    )


_BUTTON_STYLE = {
    "display": "inlineFlex",
    "align": "center",
    "justify": "center",
    "paddingX": "medium",
    "paddingY": "small",
    "fontSize": "small",
    "fontWeight": "medium",
    "borderRadius": "medium",
}

DEFAULT_COMPONENTS: list[ComponentDefinition] = [
    # Layout
    _component("container", "Container", "Container", "layout", container=True, style={"width": "full"}),
    _component(
        "flex-row",
        "FlexRow",
        "Flex Row",
        "layout",
        container=True,
        style={"display": "flex", "flexDirection": "row", "gap": "medium"},
    ),
    _component(
        "grid-2-col",
        "Grid",
        "2 Column Grid",
        "layout",
        container=True,
        props={"columns": 2},
        style={"display": "grid", "gridColumns": "2", "gap": "large"},
    ),
    _component(
        "grid-3-col",
        "Grid",
        "3 Column Grid",
        "layout",
        container=True,
        props={"columns": 3},
        style={"display": "grid", "gridColumns": "3", "gap": "large"},
    ),
    _component("divider", "Divider", "Divider", "layout", style={"marginY": "medium"}),
    _component("spacer", "Spacer", "Spacer", "layout", props={"size": "md"}),
    # Text
    _component(
        "heading",
        "Heading",
        "Heading",
        "text",
        props={"text": "Heading Text", "level": "h2"},
        style={"fontSize": "3xlarge", "fontWeight": "bold"},
    ),
    _component(
        "paragraph",
        "Paragraph",
        "Paragraph",
        "text",
        props={"text": "This is a paragraph of text. Add your content here."},
        style={"fontSize": "base", "textColor": "secondary"},
    ),
    _component("text", "Text", "Text", "text", props={"text": "Text"}),
    _component(
        "badge",
        "Badge",
        "Badge",
        "text",
        props={"text": "Badge", "variant": "primary"},
        style={"paddingX": "small", "fontSize": "xsmall", "borderRadius": "full"},
    ),
    _component("link", "Link", "Link", "text", props={"text": "Click here", "href": "#"}),
    _component("list", "List", "List", "text", props={"ordered": False}),
    # Buttons
    _component(
        "primary-button",
        "Button",
        "Primary Button",
        "buttons",
        props={"text": "Button", "href": "", "variant": "primary"},
        style={**_BUTTON_STYLE, "background": "primary", "textColor": "white"},
    ),
    _component(
        "secondary-button",
        "Button",
        "Secondary Button",
        "buttons",
        props={"text": "Button", "href": "", "variant": "secondary"},
        style={**_BUTTON_STYLE, "background": "secondary"},
    ),
    _component(
        "outline-button",
        "Button",
        "Outline Button",
        "buttons",
        props={"text": "Button", "href": "", "variant": "outline"},
        style={**_BUTTON_STYLE, "borderWidth": "thin", "borderColor": "primary", "textColor": "primary"},
    ),
    _component(
        "button-group",
        "ButtonGroup",
        "Button Group",
        "buttons",
        container=True,
        style={"display": "inlineFlex", "gap": "small"},
    ),
    # Cards
    _component(
        "simple-card",
        "Card",
        "Simple Card",
        "cards",
        container=True,
        props={"title": "Card Title", "description": "Card description goes here."},
        style={"padding": "large", "background": "white", "borderRadius": "large", "shadow": "medium"},
    ),
    # Forms
    _component(
        "input-field",
        "InputField",
        "Input Field",
        "forms",
        props={"label": "Label", "placeholder": "Enter text...", "helperText": ""},
    ),
    _component("checkbox", "Checkbox", "Checkbox", "forms", props={"label": "Check this box", "checked": False}),
    # Media
    _component(
        "image",
        "Image",
        "Image",
        "media",
        props={"src": "https://placehold.co/600x400", "alt": "Placeholder image"},
        style={"width": "full", "borderRadius": "medium"},
    ),
    _component(
        "avatar",
        "Avatar",
        "Avatar",
        "media",
        props={"src": "https://placehold.co/96x96", "alt": "Avatar"},
        style={"borderRadius": "full"},
    ),
    # Navigation
    _component(
        "navbar",
        "Navbar",
        "Navbar",
        "navigation",
        container=True,
        props={"brand": "Brand"},
        style={"display": "flex", "justify": "between", "align": "center", "paddingX": "large", "paddingY": "medium"},
    ),
    _component(
        "footer",
        "Footer",
        "Footer",
        "navigation",
        container=True,
        props={"copyright": "© 2024 Company. All rights reserved."},
        style={"paddingY": "xlarge", "background": "secondary"},
    ),
    # Sections
    _component(
        "hero-section",
        "HeroSection",
        "Hero Section",
        "sections",
        container=True,
        props={"title": "Build something great", "subtitle": "Start with a blank canvas."},
        style={"paddingY": "xlarge", "textAlign": "center"},
    ),
]


def default_registry() -> ComponentRegistry:
    """A fresh registry holding the built-in catalog."""
    return ComponentRegistry(list(DEFAULT_COMPONENTS))

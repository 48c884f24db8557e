"""
Composer Kernel — Shared Types

Data classes used across the tree, history, generator, and editor.
These are the contracts that bind the kernel together.

- Element: one node of the composition tree (kind + props + style + children)
- Snapshot: the full element set plus selection and viewport, the unit of history
- Binding: a bound-expression prop value, emitted verbatim inside braces
- GenerateOptions / GeneratedCode: code generator input and output
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ID_PREFIX = "el_"
ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]{0,63}$")
# JSX attribute names: onClick, aria-label, xlink:href
PROP_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_:-]*$")

VIEWPORTS: tuple[str, ...] = ("desktop", "tablet", "mobile")
DEFAULT_VIEWPORT: dict[str, Any] = {"name": "desktop", "zoom": 100}

DIALECTS: tuple[str, ...] = ("tsx", "jsx")

# Props emitted ahead of the registry template, in this order.
STRUCTURAL_PROPS: tuple[str, ...] = ("key", "id", "name", "type")


# ---------------------------------------------------------------------------
# Prop values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Binding:
    """A prop bound to an expression in the generated component, e.g. {user.name}."""

    expression: str

    def to_dict(self) -> dict[str, str]:
        return {"$bind": self.expression}


PropValue = Union[str, int, float, bool, Binding]


def is_prop_value(value: Any) -> bool:
    """Literal string/number/bool, or a Binding."""
    return isinstance(value, (str, int, float, bool, Binding))


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class Element:
    """
    One node of the composition tree.

    children holds child ids in document order; parent_id is a back-reference
    for traversal and cascade removal, not an ownership relation.
    """

    id: str
    kind: str
    props: dict[str, PropValue] = field(default_factory=dict)
    style: dict[str, str] = field(default_factory=dict)
    children: list[str] = field(default_factory=list)
    parent_id: str | None = None


@dataclass
class Snapshot:
    """
    The composition at one point in history.

    elements: id -> Element, the complete node set
    root_id: id of the single root, None for the empty composition
    selection: selected ids in selection order
    viewport: {"name": desktop|tablet|mobile, "zoom": percent}
    """

    elements: dict[str, Element] = field(default_factory=dict)
    root_id: str | None = None
    selection: tuple[str, ...] = ()
    viewport: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))

    @property
    def is_empty(self) -> bool:
        return self.root_id is None


def empty_snapshot() -> Snapshot:
    """The composition every history starts from."""
    return Snapshot()


@dataclass
class GenerateOptions:
    """Options controlling generated source text."""

    dialect: str = "tsx"  # "tsx" (typed) or "jsx" (untyped)
    component_name: str = "GeneratedComponent"
    indent_width: int = 2
    include_imports: bool = True
    import_module: str = "@/components/ui"


@dataclass(frozen=True)
class GeneratedCode:
    source: str
    component_name: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_valid_id(value: str) -> bool:
    """Lowercase letter first, then lowercase letters, digits, underscores. Max 64 chars."""
    return bool(ID_PATTERN.match(value))

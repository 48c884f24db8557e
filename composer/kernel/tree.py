"""
Composer Kernel — Element Tree

The canonical composition: a flat id → Element map with ordered child lists
and parent back-references, plus the id of the single root.

Mutations: insert, move, update_props, update_style, remove (cascading).
Every mutation validates first and raises a TreeError before touching
anything, so a rejected edit leaves the tree exactly as it was.

The tree does not record history. Callers commit a snapshot after each
externally visible mutation (see composer.kernel.editor).
"""

from __future__ import annotations

import copy
import math
from collections.abc import Iterable, Iterator
from typing import Any

from composer.kernel.errors import (
    CycleViolation,
    ElementNotFound,
    InvalidParent,
    InvalidPropValue,
    InvalidTarget,
    RootProtected,
    UnrecognizedStyleCategory,
)
from composer.kernel.registry import ComponentRegistry, default_registry
from composer.kernel.styles import is_known_category
from composer.kernel.types import (
    DEFAULT_VIEWPORT,
    ID_PREFIX,
    PROP_NAME_PATTERN,
    Binding,
    Element,
    Snapshot,
    is_prop_value,
)

# Derived from style attributes by the generator, never stored as props.
RESERVED_PROPS: frozenset[str] = frozenset({"className", "class", "children"})


# ---------------------------------------------------------------------------
# Id allocation
# ---------------------------------------------------------------------------


class IdFactory:
    """
    Hands out el_1, el_2, ... and never goes backwards.

    One factory is shared by a whole editing session so ids freed by a
    removal (or abandoned by an undo) are never handed out again.
    """

    def __init__(self, start: int = 1, prefix: str = ID_PREFIX) -> None:
        self._next = start
        self._prefix = prefix

    def __call__(self) -> str:
        element_id = f"{self._prefix}{self._next}"
        self._next += 1
        return element_id

    def advance_past(self, ids: Iterable[str]) -> None:
        """Make sure future ids sort after every numbered id in `ids`."""
        for element_id in ids:
            if not element_id.startswith(self._prefix):
                continue
            suffix = element_id[len(self._prefix):]
            if suffix.isdigit():
                self._next = max(self._next, int(suffix) + 1)


def _clamp(index: int | None, length: int) -> int:
    if index is None:
        return length
    return max(0, min(index, length))


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


class ElementTree:
    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        id_factory: IdFactory | None = None,
        elements: dict[str, Element] | None = None,
        root_id: str | None = None,
    ) -> None:
        self.registry = registry or default_registry()
        self._elements: dict[str, Element] = elements if elements is not None else {}
        self.root_id = root_id
        self._new_id = id_factory or IdFactory()
        self._new_id.advance_past(self._elements)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Snapshot,
        registry: ComponentRegistry | None = None,
        id_factory: IdFactory | None = None,
    ) -> ElementTree:
        """Working copy of a snapshot. The snapshot itself is never touched."""
        return cls(
            registry=registry,
            id_factory=id_factory,
            elements=copy.deepcopy(snapshot.elements),
            root_id=snapshot.root_id,
        )

    def snapshot(
        self,
        selection: Iterable[str] = (),
        viewport: dict[str, Any] | None = None,
    ) -> Snapshot:
        """Structurally independent copy of the current tree."""
        return Snapshot(
            elements=copy.deepcopy(self._elements),
            root_id=self.root_id,
            selection=tuple(s for s in selection if s in self._elements),
            viewport=dict(viewport or DEFAULT_VIEWPORT),
        )

    # -----------------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    @property
    def is_empty(self) -> bool:
        return self.root_id is None

    def get(self, element_id: str) -> Element | None:
        return self._elements.get(element_id)

    def parent_of(self, element_id: str) -> Element | None:
        element = self._require(element_id)
        if element.parent_id is None:
            return None
        return self._elements[element.parent_id]

    def ancestors(self, element_id: str) -> list[str]:
        """Parent, grandparent, ... up to the root."""
        result: list[str] = []
        current = self._elements.get(element_id)
        while current is not None and current.parent_id is not None:
            result.append(current.parent_id)
            current = self._elements.get(current.parent_id)
        return result

    def descendants(self, element_id: str) -> list[str]:
        """All ids below element_id in document order (element_id excluded)."""
        return [e.id for e in self.traverse(element_id)][1:]

    def depth(self, element_id: str) -> int:
        return len(self.ancestors(element_id))

    def traverse(self, start: str | None = None) -> Iterator[Element]:
        """Pre-order walk, children in stored order. Starts at the root by default."""
        start_id = start if start is not None else self.root_id
        if start_id is None:
            return
        stack = [start_id]
        while stack:
            element = self._elements[stack.pop()]
            yield element
            stack.extend(reversed(element.children))

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    def insert(
        self,
        parent_id: str | None,
        kind: str,
        index: int | None = None,
        props: dict[str, Any] | None = None,
        style: dict[str, Any] | None = None,
    ) -> str:
        """
        Create an element of `kind` under `parent_id` and return its id.

        parent_id=None creates the root, which is only allowed on an empty tree.
        Props and style start from the registry defaults; the given partials
        are layered on top (None deletes a default). index=None appends.
        """
        definition = self.registry.require(kind)
        parent: Element | None = None
        if parent_id is None:
            if self.root_id is not None:
                raise InvalidParent(f"composition already has root '{self.root_id}'")
        else:
            parent = self._elements.get(parent_id)
            if parent is None:
                raise InvalidParent(f"'{parent_id}' does not exist")
            if not self.registry.is_container(parent.kind):
                raise InvalidParent(f"'{parent_id}' ({parent.kind}) cannot hold children")

        new_props = _merge(definition.fresh_props(), self.checked_props(props or {}))
        new_style = _merge(definition.fresh_style(), self._checked_style(style or {}))

        element_id = self._new_id()
        self._elements[element_id] = Element(
            id=element_id,
            kind=kind,
            props=new_props,
            style=new_style,
            children=[],
            parent_id=parent_id,
        )
        if parent is None:
            self.root_id = element_id
        else:
            parent.children.insert(_clamp(index, len(parent.children)), element_id)
        return element_id

    def move(self, element_id: str, new_parent_id: str, new_index: int | None = None) -> None:
        """
        Re-parent an element (with its subtree).

        new_index is a position in the target's child list after the element
        has been taken out of its old place, so moving within one parent
        works the same as moving between parents.
        """
        element = self._require(element_id)
        if element_id == self.root_id:
            raise InvalidTarget("the root cannot be moved")
        target = self._elements.get(new_parent_id)
        if target is None:
            raise InvalidTarget(f"'{new_parent_id}' does not exist")
        if new_parent_id == element_id or element_id in self.ancestors(new_parent_id):
            raise CycleViolation(f"'{new_parent_id}' is inside '{element_id}'")
        if not self.registry.is_container(target.kind):
            raise InvalidTarget(f"'{new_parent_id}' ({target.kind}) cannot hold children")

        old_parent = self._elements[element.parent_id]
        old_parent.children.remove(element_id)
        target.children.insert(_clamp(new_index, len(target.children)), element_id)
        element.parent_id = new_parent_id

    def update_props(self, element_id: str, partial: dict[str, Any]) -> None:
        """Merge props into an element. A None value deletes that prop."""
        element = self._require(element_id)
        element.props = _merge(element.props, self.checked_props(partial))

    def update_style(self, element_id: str, partial: dict[str, Any]) -> None:
        """Merge style attributes into an element. A None value clears that category."""
        element = self._require(element_id)
        element.style = _merge(element.style, self._checked_style(partial))

    def remove(self, element_id: str) -> set[str]:
        """Remove an element and its whole subtree. Returns every removed id."""
        element = self._require(element_id)
        if element_id == self.root_id:
            raise RootProtected(f"'{element_id}' is the root")

        removed = {element_id, *self.descendants(element_id)}
        self._elements[element.parent_id].children.remove(element_id)
        for rid in removed:
            del self._elements[rid]
        return removed

    def clear(self) -> set[str]:
        """Drop every element, root included."""
        removed = set(self._elements)
        self._elements.clear()
        self.root_id = None
        return removed

    # -----------------------------------------------------------------------
    # Subtree copy (duplicate / clipboard)
    # -----------------------------------------------------------------------

    def clone_subtree(self, element_id: str) -> list[Element]:
        """Detached deep copy of a subtree, pre-order, original ids kept."""
        self._require(element_id)
        nodes = [copy.deepcopy(e) for e in self.traverse(element_id)]
        nodes[0].parent_id = None
        return nodes

    def graft(self, parent_id: str | None, nodes: list[Element], index: int | None = None) -> str:
        """
        Insert a detached subtree (as produced by clone_subtree) with fresh ids.
        Returns the new id of the subtree root.
        """
        if not nodes:
            raise InvalidTarget("nothing to insert")
        ids = {node.id for node in nodes}
        for node in nodes:
            self.registry.require(node.kind, node.id)
            if node.children and not self.registry.is_container(node.kind):
                raise InvalidTarget(f"'{node.id}' ({node.kind}) cannot hold children")
            if any(child_id not in ids for child_id in node.children):
                raise InvalidTarget(f"'{node.id}' lists children outside the copied subtree")
            self._checked_style(node.style)

        parent: Element | None = None
        if parent_id is None:
            if self.root_id is not None:
                raise InvalidParent(f"composition already has root '{self.root_id}'")
        else:
            parent = self._elements.get(parent_id)
            if parent is None:
                raise InvalidParent(f"'{parent_id}' does not exist")
            if not self.registry.is_container(parent.kind):
                raise InvalidParent(f"'{parent_id}' ({parent.kind}) cannot hold children")

        id_map = {node.id: self._new_id() for node in nodes}
        for node in nodes:
            new_id = id_map[node.id]
            self._elements[new_id] = Element(
                id=new_id,
                kind=node.kind,
                props=copy.deepcopy(node.props),
                style=dict(node.style),
                children=[id_map[c] for c in node.children],
                parent_id=id_map.get(node.parent_id, parent_id),
            )

        new_root = id_map[nodes[0].id]
        if parent is None:
            self.root_id = new_root
        else:
            parent.children.insert(_clamp(index, len(parent.children)), new_root)
        return new_root

    # -----------------------------------------------------------------------
    # Integrity
    # -----------------------------------------------------------------------

    def check_integrity(self, check_kinds: bool = True) -> list[str]:
        """
        Verify the structural invariants. Returns violations; empty means consistent.

        - exactly one root (or no elements at all), reachable set == element set
        - every child id exists once, with a matching parent back-reference
        - only container kinds have children
        - only known kinds (unless check_kinds=False) and known style categories
        """
        problems: list[str] = []
        if self.root_id is None:
            if self._elements:
                problems.append("elements exist but there is no root")
            return problems
        root = self._elements.get(self.root_id)
        if root is None:
            return [f"root '{self.root_id}' does not exist"]
        if root.parent_id is not None:
            problems.append(f"root '{self.root_id}' has parent '{root.parent_id}'")

        seen: set[str] = set()
        stack = [self.root_id]
        while stack:
            element_id = stack.pop()
            if element_id in seen:
                problems.append(f"'{element_id}' is reachable more than once")
                continue
            seen.add(element_id)
            element = self._elements[element_id]
            if element.kind not in self.registry:
                if check_kinds:
                    problems.append(f"'{element_id}' has unknown kind '{element.kind}'")
            elif element.children and not self.registry.is_container(element.kind):
                problems.append(f"'{element_id}' ({element.kind}) has children but is not a container")
            for category in element.style:
                if not is_known_category(category):
                    problems.append(f"'{element_id}' has unknown style category '{category}'")
            for child_id in element.children:
                child = self._elements.get(child_id)
                if child is None:
                    problems.append(f"'{element_id}' lists missing child '{child_id}'")
                    continue
                if child.parent_id != element_id:
                    problems.append(f"'{child_id}' points at parent '{child.parent_id}', listed under '{element_id}'")
                stack.append(child_id)

        for orphan in sorted(set(self._elements) - seen):
            problems.append(f"'{orphan}' is not reachable from the root")
        return problems

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _require(self, element_id: str) -> Element:
        element = self._elements.get(element_id)
        if element is None:
            raise ElementNotFound(element_id)
        return element

    @staticmethod
    def checked_props(partial: dict[str, Any]) -> dict[str, Any]:
        """Raise InvalidPropValue unless every name and value can be emitted as an attribute."""
        for name, value in partial.items():
            if not isinstance(name, str) or not PROP_NAME_PATTERN.match(name):
                raise InvalidPropValue(f"invalid prop name {name!r}")
            if name in RESERVED_PROPS:
                raise InvalidPropValue(f"'{name}' is derived, not a prop")
            if value is not None and not is_prop_value(value):
                raise InvalidPropValue(f"'{name}' has unsupported value {value!r}")
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidPropValue(f"'{name}' must be a finite number")
            if isinstance(value, Binding) and (
                not isinstance(value.expression, str) or not value.expression.strip()
            ):
                raise InvalidPropValue(f"'{name}' is bound to an empty expression")
        return partial

    @staticmethod
    def _checked_style(partial: dict[str, Any]) -> dict[str, Any]:
        checked: dict[str, Any] = {}
        for category, value in partial.items():
            if not is_known_category(category):
                raise UnrecognizedStyleCategory(str(category))
            if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int))):
                raise InvalidPropValue(f"style '{category}' has unsupported value {value!r}")
            checked[category] = None if value is None else str(value)
        return checked


def _merge(base: dict[str, Any], partial: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in partial.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged

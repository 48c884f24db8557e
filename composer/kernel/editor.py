"""
Composer Kernel — Editor Session

Sits between the pure pieces (tree, history, generator) and whatever drives
them (a canvas, the CLI, tests). Owns the working tree, the selection, the
viewport, the clipboard, and the history buffer.

Coupling rule: every successful mutation is followed by exactly one history
commit. A rejected mutation raises, leaves the tree untouched, and commits
nothing. Several mutations can be grouped into one commit with batch(),
e.g. for a drag gesture: the entry is committed when the gesture ends.

Selection and viewport changes ride along with the next commit; they do
not create history entries of their own.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from composer.config import settings
from composer.kernel.errors import (
    ComposerError,
    DocumentError,
    ElementNotFound,
    GenerationError,
    InvalidTarget,
    TreeError,
)
from composer.kernel.generator import generate
from composer.kernel.history import History
from composer.kernel.registry import ComponentRegistry, default_registry
from composer.kernel.tree import ElementTree, IdFactory
from composer.kernel.types import (
    DEFAULT_VIEWPORT,
    VIEWPORTS,
    Element,
    GeneratedCode,
    GenerateOptions,
    Snapshot,
    empty_snapshot,
)

logger = logging.getLogger(__name__)

MIN_ZOOM = 10
MAX_ZOOM = 400


class Editor:
    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        initial: Snapshot | None = None,
        max_history: int | None = None,
    ) -> None:
        self.registry = registry or default_registry()
        start = initial if initial is not None else empty_snapshot()

        self._ids = IdFactory()
        self._ids.advance_past(start.elements)
        if max_history is None:
            max_history = settings.history_limit
        self.history = History(start, max_entries=max_history)
        self._tree = ElementTree.from_snapshot(start, self.registry, self._ids)
        self._selection: list[str] = list(start.selection)
        self._viewport: dict[str, Any] = dict(start.viewport)
        self._clipboard: list[Element] | None = None

        self._batch_depth = 0
        self._batch_dirty = False

        self.last_generated: GeneratedCode | None = None

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def tree(self) -> ElementTree:
        """The working tree. Read from it; mutate through the editor."""
        return self._tree

    @property
    def selection(self) -> tuple[str, ...]:
        return tuple(self._selection)

    @property
    def viewport(self) -> dict[str, Any]:
        return dict(self._viewport)

    def snapshot(self) -> Snapshot:
        return self._tree.snapshot(self._selection, self._viewport)

    # -----------------------------------------------------------------------
    # Mutations (one commit each)
    # -----------------------------------------------------------------------

    def insert(
        self,
        parent_id: str | None,
        kind: str,
        index: int | None = None,
        props: dict[str, Any] | None = None,
        style: dict[str, Any] | None = None,
    ) -> str:
        element_id = self._apply("insert", self._tree.insert, parent_id, kind, index, props, style)
        self._selection = [element_id]
        self._changed("insert")
        return element_id

    def move(self, element_id: str, new_parent_id: str, new_index: int | None = None) -> None:
        self._apply("move", self._tree.move, element_id, new_parent_id, new_index)
        self._changed("move")

    def update_props(self, element_id: str, partial: dict[str, Any]) -> None:
        self._apply("update_props", self._tree.update_props, element_id, partial)
        self._changed("update_props")

    def update_style(self, element_id: str, partial: dict[str, Any]) -> None:
        self._apply("update_style", self._tree.update_style, element_id, partial)
        self._changed("update_style")

    def remove(self, element_id: str) -> set[str]:
        removed = self._apply("remove", self._tree.remove, element_id)
        self._selection = [s for s in self._selection if s not in removed]
        self._changed("remove")
        return removed

    def duplicate(self, element_id: str) -> str:
        """Clone an element and its subtree right after the original."""
        parent = self._apply("duplicate", self._tree.parent_of, element_id)
        if parent is None:
            logger.warning("editor: duplicate rejected: '%s' is the root", element_id)
            raise InvalidTarget("the root cannot be duplicated")
        nodes = self._tree.clone_subtree(element_id)
        index = parent.children.index(element_id) + 1
        new_id = self._apply("duplicate", self._tree.graft, parent.id, nodes, index)
        self._selection = [new_id]
        self._changed("duplicate")
        return new_id

    def paste(self, parent_id: str | None = None, index: int | None = None) -> str | None:
        """
        Insert a fresh copy of the clipboard. Defaults to the end of the root;
        on an empty canvas the pasted subtree becomes the root.
        Returns the new id, or None when the clipboard is empty.
        """
        if self._clipboard is None:
            return None
        target = parent_id if parent_id is not None else self._tree.root_id
        new_id = self._apply("paste", self._tree.graft, target, copy.deepcopy(self._clipboard), index)
        self._selection = [new_id]
        self._changed("paste")
        return new_id

    def clear(self) -> None:
        """Remove everything, root included. Nothing is committed for an empty canvas."""
        if self._tree.is_empty:
            return
        self._tree.clear()
        self._selection = []
        self._changed("clear")

    def load(self, snapshot: Snapshot) -> None:
        """
        Replace the composition with a saved one, as a single undoable step.

        Raises DocumentError (and changes nothing) if the snapshot is not a
        consistent tree. Unknown kinds are let through; generate reports them.
        """
        problems = ElementTree.from_snapshot(snapshot, self.registry).check_integrity(check_kinds=False)
        for element in snapshot.elements.values():
            try:
                ElementTree.checked_props(element.props)
            except TreeError as e:
                problems.append(f"'{element.id}': {e.message}")
        if problems:
            logger.warning("editor: load rejected: %s", "; ".join(problems))
            raise DocumentError("; ".join(problems))
        self._ids.advance_past(snapshot.elements)
        self._restore(snapshot)
        self._changed("load")

    # -----------------------------------------------------------------------
    # Batching
    # -----------------------------------------------------------------------

    @contextmanager
    def batch(self, label: str = "batch") -> Iterator[Editor]:
        """
        Group mutations into a single history entry, committed on exit.

        Nested batches join the outermost one. If an exception escapes, every
        change made inside the batch is rolled back and nothing is committed.
        """
        if self._batch_depth:
            self._batch_depth += 1
            try:
                yield self
            finally:
                self._batch_depth -= 1
            return

        before = self.snapshot()
        self._batch_depth = 1
        self._batch_dirty = False
        try:
            yield self
        except Exception:
            self._batch_depth = 0
            self._restore(before)
            logger.warning("editor: %s rolled back", label)
            raise
        self._batch_depth = 0
        if self._batch_dirty:
            self._commit(label)

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    # -----------------------------------------------------------------------
    # History
    # -----------------------------------------------------------------------

    def undo(self) -> Snapshot:
        self._guard_batch("undo")
        snapshot = self.history.undo()
        self._restore(snapshot)
        return snapshot

    def redo(self) -> Snapshot:
        self._guard_batch("redo")
        snapshot = self.history.redo()
        self._restore(snapshot)
        return snapshot

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def history_length(self) -> int:
        return self.history.length

    @property
    def current_position(self) -> int:
        return self.history.position

    # -----------------------------------------------------------------------
    # Selection, viewport, clipboard (no commit)
    # -----------------------------------------------------------------------

    def select(self, *element_ids: str, additive: bool = False) -> None:
        for element_id in element_ids:
            if element_id not in self._tree:
                raise ElementNotFound(element_id)
        chosen = list(self._selection) if additive else []
        for element_id in element_ids:
            if element_id not in chosen:
                chosen.append(element_id)
        self._selection = chosen

    def clear_selection(self) -> None:
        self._selection = []

    def set_viewport(self, name: str) -> None:
        if name not in VIEWPORTS:
            raise ValueError(f"unknown viewport {name!r}, expected one of {VIEWPORTS}")
        self._viewport["name"] = name

    def set_zoom(self, percent: int) -> None:
        self._viewport["zoom"] = max(MIN_ZOOM, min(MAX_ZOOM, int(percent)))

    def copy(self, element_id: str) -> None:
        self._clipboard = self._tree.clone_subtree(element_id)

    @property
    def has_clipboard(self) -> bool:
        return self._clipboard is not None

    # -----------------------------------------------------------------------
    # Code generation
    # -----------------------------------------------------------------------

    def generate(self, options: GenerateOptions | None = None) -> GeneratedCode:
        """
        Generate source for the current composition.

        On failure the error propagates and last_generated keeps the previous
        good output.
        """
        try:
            code = generate(self.snapshot(), options or settings.generate_options(), self.registry)
        except GenerationError as e:
            logger.error("editor: generation failed, keeping previous output: %s", e)
            raise
        self.last_generated = code
        return code

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _apply(self, action: str, operation: Callable[..., Any], *args: Any) -> Any:
        try:
            return operation(*args)
        except ComposerError as e:
            logger.warning("editor: %s rejected: %s", action, e)
            raise

    def _changed(self, action: str) -> None:
        if self._batch_depth:
            self._batch_dirty = True
            return
        self._commit(action)

    def _commit(self, action: str) -> None:
        self.history.commit(self.snapshot())
        logger.debug("editor: committed %s (%d/%d)", action, self.history.position, self.history.length)

    def _restore(self, snapshot: Snapshot) -> None:
        self._tree = ElementTree.from_snapshot(snapshot, self.registry, self._ids)
        self._selection = [s for s in snapshot.selection if s in self._tree]
        self._viewport = dict(snapshot.viewport or DEFAULT_VIEWPORT)

    def _guard_batch(self, action: str) -> None:
        if self._batch_depth:
            raise RuntimeError(f"cannot {action} while a batch is open")

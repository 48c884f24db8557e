"""
Composer Kernel — the pure engine.

Components:
  styles     — style attributes → ordered utility class tokens (pure)
  registry   — component kinds: container capability, default props/styles
  tree       — the element tree and its mutations
  history    — linear snapshot history with undo/redo
  generator  — (snapshot, options) → component source text (pure, deterministic)
  editor     — session coordinating tree + history + selection
  persistence — snapshot ↔ JSON document
"""

from composer.kernel.editor import Editor
from composer.kernel.generator import generate, generate_markup
from composer.kernel.history import History
from composer.kernel.registry import ComponentDefinition, ComponentRegistry, default_registry
from composer.kernel.styles import class_name, resolve
from composer.kernel.tree import ElementTree
from composer.kernel.types import (
    Binding,
    Element,
    GeneratedCode,
    GenerateOptions,
    Snapshot,
    empty_snapshot,
)

__all__ = [
    "Binding",
    "ComponentDefinition",
    "ComponentRegistry",
    "Editor",
    "Element",
    "ElementTree",
    "GeneratedCode",
    "GenerateOptions",
    "History",
    "Snapshot",
    "class_name",
    "default_registry",
    "empty_snapshot",
    "generate",
    "generate_markup",
    "resolve",
]

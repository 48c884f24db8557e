"""
Composer Kernel — Persistence

Snapshot ↔ JSON document, lossless for ids, kinds, props, style attributes,
child order, parent links, selection, and viewport.

  dumps / loads           text form (sorted keys, stable layout)
  snapshot_to_dict / ...  plain-dict form
  fingerprint             short content hash for quick equality checks

Bound prop values are stored as {"$bind": "<expression>"}.
Documents are shape-checked with pydantic, then structurally checked with
the tree's integrity rules, before a Snapshot is handed back.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import ValidationError

from composer.kernel.errors import DocumentError, TreeError
from composer.kernel.registry import ComponentRegistry
from composer.kernel.tree import ElementTree
from composer.kernel.types import Binding, Element, Snapshot, is_valid_id
from composer.models.document import DOCUMENT_VERSION, SnapshotDocument

BIND_KEY = "$bind"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "version": DOCUMENT_VERSION,
        "root": snapshot.root_id,
        "elements": {
            element_id: {
                "kind": element.kind,
                "props": {name: _encode_prop(value) for name, value in element.props.items()},
                "style": dict(element.style),
                "children": list(element.children),
                "parent": element.parent_id,
            }
            for element_id, element in snapshot.elements.items()
        },
        "selection": list(snapshot.selection),
        "viewport": dict(snapshot.viewport),
    }


def snapshot_from_dict(data: dict[str, Any], registry: ComponentRegistry | None = None) -> Snapshot:
    """
    Rebuild a Snapshot from its dict form.
    Raises DocumentError if the document is malformed or structurally inconsistent.
    Unknown kinds are allowed here; generation reports them.
    """
    try:
        doc = SnapshotDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"invalid document: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e

    elements: dict[str, Element] = {}
    for element_id, item in doc.elements.items():
        if not is_valid_id(element_id):
            raise DocumentError(f"invalid element id {element_id!r}")
        props = {name: _decode_prop(element_id, name, value) for name, value in item.props.items()}
        try:
            ElementTree.checked_props(props)
        except TreeError as e:
            raise DocumentError(f"'{element_id}': {e.message}") from e
        elements[element_id] = Element(
            id=element_id,
            kind=item.kind,
            props=props,
            style=dict(item.style),
            children=list(item.children),
            parent_id=item.parent,
        )

    tree = ElementTree(registry=registry, elements=elements, root_id=doc.root)
    problems = tree.check_integrity(check_kinds=False)
    if problems:
        raise DocumentError("; ".join(problems))

    return tree.snapshot(selection=doc.selection, viewport=doc.viewport.model_dump())


def dumps(snapshot: Snapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot), sort_keys=True, indent=2, ensure_ascii=False) + "\n"


def loads(text: str, registry: ComponentRegistry | None = None) -> Snapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DocumentError("document must be a JSON object")
    return snapshot_from_dict(data, registry)


def fingerprint(snapshot: Snapshot) -> str:
    """First 16 hex chars of the SHA-256 of the canonical JSON form."""
    serialized = json.dumps(snapshot_to_dict(snapshot), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _encode_prop(value: Any) -> Any:
    if isinstance(value, Binding):
        return value.to_dict()
    return value


def _decode_prop(element_id: str, name: str, value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {BIND_KEY} and isinstance(value[BIND_KEY], str):
            return Binding(value[BIND_KEY])
        raise DocumentError(f"'{element_id}' prop '{name}' is an object but not a binding")
    if value is None or isinstance(value, list):
        raise DocumentError(f"'{element_id}' prop '{name}' has unsupported value {value!r}")
    return value

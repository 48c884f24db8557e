"""
Composer Kernel — Errors

Every rejection raised by the kernel carries a stable `code` so callers can
branch on it without matching message text.

Tree errors are raised before any structural change is applied: when one
propagates, the tree is exactly as it was before the call.
"""

from __future__ import annotations


class ComposerError(Exception):
    """Base class for all kernel errors."""

    code = "COMPOSER_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code


# ---------------------------------------------------------------------------
# Tree mutation
# ---------------------------------------------------------------------------


class TreeError(ComposerError):
    """A tree mutation was rejected. The tree is unchanged."""

    code = "TREE_ERROR"


class InvalidParent(TreeError):
    """Insert target does not exist or cannot hold children."""

    code = "INVALID_PARENT"


class InvalidTarget(TreeError):
    """Move target does not exist, cannot hold children, or the node cannot move."""

    code = "INVALID_TARGET"


class CycleViolation(InvalidTarget):
    """Move would place a node inside itself or one of its descendants."""

    code = "CYCLE_VIOLATION"


class RootProtected(TreeError):
    """The root element cannot be removed."""

    code = "ROOT_PROTECTED"


class ElementNotFound(TreeError):
    code = "ELEMENT_NOT_FOUND"


class InvalidPropValue(TreeError):
    code = "INVALID_PROP_VALUE"


class UnrecognizedStyleCategory(TreeError):
    """Style key is not part of the utility vocabulary."""

    code = "UNRECOGNIZED_STYLE_CATEGORY"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class GenerationError(ComposerError):
    code = "GENERATION_ERROR"


class UnknownComponentKind(GenerationError):
    """A node references a kind missing from the component registry."""

    code = "UNKNOWN_COMPONENT_KIND"

    def __init__(self, kind: str, element_id: str | None = None) -> None:
        where = f" (element '{element_id}')" if element_id else ""
        super().__init__(f"'{kind}' is not registered{where}")
        self.kind = kind
        self.element_id = element_id


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class DocumentError(ComposerError):
    """Serialized snapshot is malformed or inconsistent."""

    code = "DOCUMENT_ERROR"

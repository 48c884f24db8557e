from composer.models.document import (
    DOCUMENT_VERSION,
    ElementDocument,
    SnapshotDocument,
    ViewportDocument,
)

__all__ = [
    "DOCUMENT_VERSION",
    "ElementDocument",
    "SnapshotDocument",
    "ViewportDocument",
]

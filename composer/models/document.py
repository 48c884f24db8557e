"""Persisted snapshot document shape."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

DOCUMENT_VERSION = 1


class ElementDocument(BaseModel):
    """One element, keyed by id in SnapshotDocument.elements."""

    model_config = {"extra": "forbid"}

    kind: str = Field(min_length=1)
    props: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, str] = Field(default_factory=dict)
    children: list[str] = Field(default_factory=list)
    parent: str | None = None


class ViewportDocument(BaseModel):
    model_config = {"extra": "forbid"}

    name: Literal["desktop", "tablet", "mobile"] = "desktop"
    zoom: int = Field(default=100, ge=10, le=400)


class SnapshotDocument(BaseModel):
    """What a saved composition file contains."""

    model_config = {"extra": "forbid"}

    version: Literal[1] = DOCUMENT_VERSION
    root: str | None = None
    elements: dict[str, ElementDocument] = Field(default_factory=dict)
    selection: list[str] = Field(default_factory=list)
    viewport: ViewportDocument = Field(default_factory=ViewportDocument)

"""
Kernel test configuration.

Shared fixtures: a fresh default registry, an empty tree, an empty editor,
and a small landing-page composition built through the editor.
"""

import pytest

from composer.kernel.editor import Editor
from composer.kernel.registry import default_registry
from composer.kernel.tree import ElementTree


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def tree(registry):
    return ElementTree(registry)


@pytest.fixture
def editor(registry):
    return Editor(registry)


@pytest.fixture
def landing_page(editor):
    """
    container (root)
      navbar
        link
      hero-section
        heading
        primary-button
      footer

    Returns (editor, ids) where ids maps a short name to each element id.
    """
    ids = {}
    ids["root"] = editor.insert(None, "container")
    ids["nav"] = editor.insert(ids["root"], "navbar")
    ids["link"] = editor.insert(ids["nav"], "link", props={"text": "Docs", "href": "/docs"})
    ids["hero"] = editor.insert(ids["root"], "hero-section")
    ids["heading"] = editor.insert(ids["hero"], "heading", props={"text": "Ship faster"})
    ids["cta"] = editor.insert(ids["hero"], "primary-button", props={"text": "Get started"})
    ids["footer"] = editor.insert(ids["root"], "footer")
    return editor, ids

"""
Element Tree — Rejection Tests

Covers:
  - every rejected mutation raises its specific error
  - a rejected mutation leaves the tree byte-for-byte unchanged
  - error codes and the CycleViolation / InvalidTarget relationship
"""

import pytest

from composer.kernel.errors import (
    ComposerError,
    CycleViolation,
    ElementNotFound,
    InvalidParent,
    InvalidPropValue,
    InvalidTarget,
    RootProtected,
    TreeError,
    UnknownComponentKind,
    UnrecognizedStyleCategory,
)
from composer.kernel.types import Binding


@pytest.fixture
def page(tree):
    root = tree.insert(None, "container")
    row = tree.insert(root, "flex-row")
    text = tree.insert(row, "text")
    card = tree.insert(root, "simple-card")
    return tree, {"root": root, "row": row, "text": text, "card": card}


def assert_rejected(tree, error, operation, *args):
    before = tree.snapshot()
    with pytest.raises(error):
        operation(*args)
    assert tree.snapshot() == before
    assert tree.check_integrity() == []


# ============================================================================
# 1. insert
# ============================================================================


class TestInsertRejections:
    def test_unknown_kind(self, page):
        tree, ids = page
        assert_rejected(tree, UnknownComponentKind, tree.insert, ids["root"], "carousel")

    def test_unknown_kind_carries_kind(self, page):
        tree, ids = page
        with pytest.raises(UnknownComponentKind) as exc:
            tree.insert(ids["root"], "carousel")
        assert exc.value.kind == "carousel"
        assert exc.value.code == "UNKNOWN_COMPONENT_KIND"

    def test_missing_parent(self, page):
        tree, _ = page
        assert_rejected(tree, InvalidParent, tree.insert, "el_404", "text")

    def test_leaf_parent(self, page):
        tree, ids = page
        assert_rejected(tree, InvalidParent, tree.insert, ids["text"], "text")

    def test_second_root(self, page):
        tree, _ = page
        assert_rejected(tree, InvalidParent, tree.insert, None, "container")

    def test_unrecognized_style_category(self, page):
        tree, ids = page
        assert_rejected(
            tree, UnrecognizedStyleCategory, tree.insert, ids["root"], "text", None, None, {"glow": "bright"}
        )

    def test_reserved_prop(self, page):
        tree, ids = page
        assert_rejected(tree, InvalidPropValue, tree.insert, ids["root"], "text", None, {"className": "p-4"})

    def test_insert_rejection_does_not_consume_an_id(self, page):
        tree, ids = page
        with pytest.raises(UnknownComponentKind):
            tree.insert(ids["root"], "carousel")
        with pytest.raises(InvalidParent):
            tree.insert(ids["text"], "text")
        assert tree.insert(ids["root"], "text") == "el_5"


# ============================================================================
# 2. move
# ============================================================================


class TestMoveRejections:
    def test_move_into_self(self, page):
        tree, ids = page
        assert_rejected(tree, CycleViolation, tree.move, ids["row"], ids["row"])

    def test_move_into_descendant(self, page):
        tree, ids = page
        inner = tree.insert(ids["card"], "flex-row")
        assert_rejected(tree, CycleViolation, tree.move, ids["card"], inner)

    def test_cycle_is_an_invalid_target(self, page):
        tree, ids = page
        with pytest.raises(InvalidTarget) as exc:
            tree.move(ids["root"], ids["row"])
        assert exc.value.code == "INVALID_TARGET"
        with pytest.raises(InvalidTarget) as exc:
            tree.move(ids["row"], ids["row"])
        assert exc.value.code == "CYCLE_VIOLATION"

    def test_move_root(self, page):
        tree, ids = page
        assert_rejected(tree, InvalidTarget, tree.move, ids["root"], ids["card"])

    def test_move_onto_leaf(self, page):
        tree, ids = page
        assert_rejected(tree, InvalidTarget, tree.move, ids["card"], ids["text"])

    def test_move_to_missing_target(self, page):
        tree, ids = page
        assert_rejected(tree, InvalidTarget, tree.move, ids["text"], "el_404")

    def test_move_missing_element(self, page):
        tree, ids = page
        assert_rejected(tree, ElementNotFound, tree.move, "el_404", ids["root"])


# ============================================================================
# 3. updates and removal
# ============================================================================


class TestUpdateRejections:
    def test_update_missing_element(self, page):
        tree, _ = page
        assert_rejected(tree, ElementNotFound, tree.update_props, "el_404", {"text": "x"})
        assert_rejected(tree, ElementNotFound, tree.update_style, "el_404", {"padding": "small"})

    def test_unrecognized_style_category_rejects_whole_partial(self, page):
        tree, ids = page
        assert_rejected(
            tree, UnrecognizedStyleCategory, tree.update_style, ids["text"], {"padding": "small", "glow": "x"}
        )

    @pytest.mark.parametrize("value", [True, 1.5, ["p-4"], {"a": 1}])
    def test_style_value_types(self, page, value):
        tree, ids = page
        assert_rejected(tree, InvalidPropValue, tree.update_style, ids["text"], {"padding": value})

    @pytest.mark.parametrize(
        "value", [[1, 2], {"a": 1}, object(), float("nan"), float("inf"), Binding(""), Binding("   ")]
    )
    def test_prop_value_types(self, page, value):
        tree, ids = page
        assert_rejected(tree, InvalidPropValue, tree.update_props, ids["text"], {"text": value})

    @pytest.mark.parametrize("name", ["", "1st", "has space", "class", "children"])
    def test_prop_names(self, page, name):
        tree, ids = page
        assert_rejected(tree, InvalidPropValue, tree.update_props, ids["text"], {name: "x"})

    def test_remove_root(self, page):
        tree, ids = page
        assert_rejected(tree, RootProtected, tree.remove, ids["root"])

    def test_remove_missing(self, page):
        tree, _ = page
        assert_rejected(tree, ElementNotFound, tree.remove, "el_404")


# ============================================================================
# 4. error shape
# ============================================================================


class TestErrorShape:
    def test_tree_errors_share_a_base(self):
        for error in (InvalidParent, InvalidTarget, CycleViolation, RootProtected, ElementNotFound):
            assert issubclass(error, TreeError)
            assert issubclass(error, ComposerError)

    def test_str_includes_code(self):
        assert str(RootProtected("'el_1' is the root")) == "ROOT_PROTECTED: 'el_1' is the root"
        assert str(ElementNotFound()) == "ELEMENT_NOT_FOUND"

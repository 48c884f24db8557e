"""
Editor — Batch Tests

Covers:
  - a batch of mutations commits exactly once, when it closes
  - an empty batch commits nothing
  - nested batches join the outermost one
  - an exception inside a batch rolls every change back and commits nothing
  - undo/redo are refused while a batch is open
"""

import logging

import pytest

from composer.kernel.errors import InvalidParent


class TestBatch:
    def test_drag_gesture_commits_once(self, landing_page):
        editor, ids = landing_page
        with editor.batch("drag"):
            editor.move(ids["cta"], ids["root"])
            editor.move(ids["cta"], ids["nav"])
            editor.move(ids["cta"], ids["footer"])
            assert editor.in_batch
            assert editor.history_length == 8
        assert not editor.in_batch
        assert editor.history_length == 9
        assert editor.tree.get(ids["footer"]).children == [ids["cta"]]

    def test_undo_reverts_whole_batch(self, landing_page):
        editor, ids = landing_page
        before = editor.snapshot()
        with editor.batch():
            editor.update_style(ids["heading"], {"textColor": "primary"})
            editor.update_props(ids["heading"], {"text": "Batched"})
            editor.insert(ids["hero"], "paragraph")
        editor.undo()
        assert editor.snapshot() == before

    def test_empty_batch_commits_nothing(self, landing_page):
        editor, ids = landing_page
        with editor.batch():
            editor.select(ids["heading"])
        assert editor.history_length == 8
        assert editor.selection == (ids["heading"],)

    def test_nested_batches_commit_once(self, landing_page):
        editor, ids = landing_page
        with editor.batch("outer"):
            editor.update_props(ids["heading"], {"text": "One"})
            with editor.batch("inner"):
                editor.update_props(ids["heading"], {"text": "Two"})
            assert editor.in_batch
            assert editor.history_length == 8
        assert editor.history_length == 9
        assert editor.tree.get(ids["heading"]).props["text"] == "Two"

    def test_exception_rolls_back(self, landing_page, caplog):
        editor, ids = landing_page
        before = editor.snapshot()
        with caplog.at_level(logging.WARNING, logger="composer.kernel.editor"):
            with pytest.raises(RuntimeError, match="gesture cancelled"):
                with editor.batch("drag"):
                    editor.move(ids["cta"], ids["footer"])
                    editor.set_viewport("tablet")
                    raise RuntimeError("gesture cancelled")
        assert editor.snapshot() == before
        assert editor.history_length == 8
        assert not editor.in_batch
        assert "drag rolled back" in caplog.text

    def test_rejected_mutation_inside_batch_rolls_back(self, landing_page):
        editor, ids = landing_page
        before = editor.snapshot()
        with pytest.raises(InvalidParent):
            with editor.batch():
                editor.update_props(ids["heading"], {"text": "Lost"})
                editor.insert(ids["heading"], "text")
        assert editor.snapshot() == before
        assert editor.history_length == 8

    def test_rejection_caught_inside_batch_keeps_other_changes(self, landing_page):
        editor, ids = landing_page
        with editor.batch():
            editor.update_props(ids["heading"], {"text": "Kept"})
            with pytest.raises(InvalidParent):
                editor.insert(ids["heading"], "text")
        assert editor.history_length == 9
        assert editor.tree.get(ids["heading"]).props["text"] == "Kept"

    def test_undo_refused_inside_batch(self, landing_page):
        editor, ids = landing_page
        with editor.batch():
            editor.update_props(ids["heading"], {"text": "Pending"})
            with pytest.raises(RuntimeError):
                editor.undo()
            with pytest.raises(RuntimeError):
                editor.redo()
        assert editor.history_length == 9

    def test_editor_usable_after_rollback(self, landing_page):
        editor, ids = landing_page
        with pytest.raises(ValueError):
            with editor.batch():
                editor.remove(ids["hero"])
                raise ValueError("abort")
        assert ids["hero"] in editor.tree
        editor.remove(ids["hero"])
        assert editor.history_length == 9
        editor.undo()
        assert ids["heading"] in editor.tree

"""
Editor Session Test Suite

1. test_editor_session.py - mutation/commit coupling, undo/redo, selection
2. test_editor_batch.py   - gesture batching and rollback
3. test_editor_clipboard.py - duplicate, copy, paste
"""

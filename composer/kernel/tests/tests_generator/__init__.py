"""
Code Generator Test Suite

1. test_generator_output.py      - file layout, tags, props, dialects, failures
2. test_generator_determinism.py - idempotence and edit-order independence
"""

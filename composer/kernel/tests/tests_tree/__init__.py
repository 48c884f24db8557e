"""
Element Tree Test Suite

1. test_tree_mutations.py  - insert / move / update / remove happy paths
2. test_tree_rejections.py - every rejection leaves the tree untouched
3. test_tree_integrity.py  - invariants hold across long random edit sequences
"""

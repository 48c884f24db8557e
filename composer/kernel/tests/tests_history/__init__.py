"""History Engine Test Suite"""

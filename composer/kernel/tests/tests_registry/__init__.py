"""
Component Registry Test Suite

1. test_registry_catalog.py - built-in catalog, lookups, custom registrations
"""

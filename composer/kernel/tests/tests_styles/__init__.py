"""Style Resolver Test Suite"""

"""Persistence Test Suite"""

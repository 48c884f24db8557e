"""Tailwind Composer — compose UI element trees and compile them to React + Tailwind source."""

__version__ = "0.1.0"

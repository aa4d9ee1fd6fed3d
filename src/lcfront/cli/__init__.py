"""
lcfront Command-Line Interface
==============================

- **lcparse**: parse a source file and print its tree or canonical source

Implemented with Click.
"""

__all__ = ["lcparse"]

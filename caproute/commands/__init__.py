"""
Chat input parsing.
"""

from .parser import CommandParser, PREFIX_MARKER

__all__ = ["CommandParser", "PREFIX_MARKER"]

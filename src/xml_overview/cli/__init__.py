"""Command-line interface for XML Overview.

This module provides the xml-overview tool, which prints or writes the
overview of a single markup document.
"""

from .main import main

__all__ = ["main"]

"""XML Overview.

Generates a compact overview of a markup document: the element tree with
attribute values stripped, comments dropped and repeated sibling shapes
collapsed to their richest representative.

Progressive API Disclosure:
- Level 1: Simple functions - overview(), overview_string(), overview_file()
- Level 2: Configured pipeline - XMLOverview class
"""

__version__ = "0.1.0"
__author__ = "XML Overview Team"

from .api import (
    OverviewResult,
    XMLOverview,
    overview,
    overview_file,
    overview_string,
    strip_synthetic_root,
)
from .shared import LexError, BuildError, OverviewConfig, OverviewError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "overview",
    "overview_file",
    "overview_string",
    "strip_synthetic_root",

    # Level 2: Configured pipeline
    "XMLOverview",
    "OverviewResult",
    "OverviewConfig",

    # Errors
    "OverviewError",
    "LexError",
    "BuildError",
]

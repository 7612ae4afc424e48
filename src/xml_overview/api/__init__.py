"""Public API for the overview pipeline."""

from .overview import (
    OverviewResult,
    XMLOverview,
    decode_document,
    overview,
    overview_file,
    overview_string,
    strip_synthetic_root,
)

__all__ = [
    "OverviewResult",
    "XMLOverview",
    "decode_document",
    "overview",
    "overview_file",
    "overview_string",
    "strip_synthetic_root",
]

"""Shared utilities for the overview pipeline.

This module provides configuration, error types, diagnostics and logging used
across the scanning, tree, rendering and API layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    OverviewConfig,
)
from .errors import (
    BuildError,
    ClosingTagMismatchError,
    DocumentEncodingError,
    EmptyInputError,
    LexError,
    NoClosingTagError,
    OverviewError,
    UnexpectedClosingTagError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    current_memory_usage,
)

__all__ = [
    "BuildError",
    "ClosingTagMismatchError",
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "DocumentEncodingError",
    "EmptyInputError",
    "LexError",
    "NoClosingTagError",
    "OverviewConfig",
    "OverviewError",
    "PerformanceMetrics",
    "UnexpectedClosingTagError",
    "current_memory_usage",
    "get_logger",
]

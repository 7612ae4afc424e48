"""Diagnostic and metrics types shared by the overview pipeline stages."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

import psutil


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Per-stage timings and volume counters for one conversion."""

    scan_time_ms: float = 0.0
    build_time_ms: float = 0.0
    minimize_time_ms: float = 0.0
    render_time_ms: float = 0.0
    memory_used_bytes: int = 0
    characters_processed: int = 0
    tokens_generated: int = 0
    elements_built: int = 0
    nodes_removed: int = 0

    @property
    def processing_time_ms(self) -> float:
        """Total time spent across all stages."""
        return (
            self.scan_time_ms
            + self.build_time_ms
            + self.minimize_time_ms
            + self.render_time_ms
        )

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def reduction_ratio(self) -> float:
        """Fraction of built elements dropped by minimization."""
        if self.elements_built == 0:
            return 0.0
        return self.nodes_removed / self.elements_built

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return {
            "scan_time_ms": self.scan_time_ms,
            "build_time_ms": self.build_time_ms,
            "minimize_time_ms": self.minimize_time_ms,
            "render_time_ms": self.render_time_ms,
            "processing_time_ms": self.processing_time_ms,
            "memory_used_bytes": self.memory_used_bytes,
            "characters_processed": self.characters_processed,
            "tokens_generated": self.tokens_generated,
            "elements_built": self.elements_built,
            "nodes_removed": self.nodes_removed,
            "reduction_ratio": self.reduction_ratio,
        }


def current_memory_usage() -> int:
    """Get resident memory of the current process in bytes."""
    return psutil.Process().memory_info().rss

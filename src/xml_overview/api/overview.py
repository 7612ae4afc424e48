"""Public API for producing document overviews.

Level 1 is the module functions (``overview``, ``overview_string``,
``overview_file``) returning the final text; Level 2 is the ``XMLOverview``
class, whose ``convert`` returns an OverviewResult with the intermediate
tokens, graph, statistics and timings. Unlike a never-fail parser, every
function here raises an OverviewError subclass when a stage fails; an empty
string is never returned in place of an error.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xml_overview.render import OverviewRenderer
from xml_overview.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    DocumentEncodingError,
    OverviewConfig,
    OverviewError,
    PerformanceMetrics,
    current_memory_usage,
    get_logger,
)
from xml_overview.tokenization import MarkupScanner, Token
from xml_overview.tree import (
    Graph,
    MinimizationStats,
    Minimizer,
    TreeBuilder,
    validate_graph,
)

InputType = Union[str, bytes, Path]

ROOT_OPEN = "<>"
ROOT_CLOSE = "</>"
MS_PER_SECOND = 1000


def strip_synthetic_root(rendered: str) -> str:
    """Remove the synthetic root's wrapper tags from rendered output.

    Args:
        rendered: Output of the renderer, starting at the synthetic root

    Returns:
        The document overview without the ``<>``/``</>`` wrapper
    """
    if rendered == ROOT_CLOSE:
        return ""
    if rendered.startswith(ROOT_OPEN):
        rendered = rendered[len(ROOT_OPEN):]
    if rendered.endswith(ROOT_CLOSE):
        rendered = rendered[:-len(ROOT_CLOSE)]
    return rendered


def decode_document(data: bytes) -> str:
    """Decode raw document bytes as UTF-8, dropping a byte order mark.

    Raises:
        DocumentEncodingError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DocumentEncodingError(e.start, e.reason) from e


@dataclass
class OverviewResult:
    """Everything produced by one conversion."""

    text: str
    rendered: str
    graph: Graph
    tokens: List[Token]
    minimization: Optional[MinimizationStats] = None
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Number of elements left in the overview."""
        return self.graph.element_count

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the conversion."""
        return {
            "correlation_id": self.correlation_id,
            "token_count": len(self.tokens),
            "element_count": self.element_count,
            "max_depth": self.graph.max_depth,
            "nodes_removed": (
                self.minimization.nodes_removed if self.minimization else 0
            ),
            "performance": self.performance.to_dict(),
            "diagnostics": [
                {
                    "severity": diag.severity.name,
                    "message": diag.message,
                    "component": diag.component,
                }
                for diag in self.diagnostics
            ],
        }


class XMLOverview:
    """Configured overview pipeline: scan, build, minimize, render.

    Examples:
        >>> converter = XMLOverview(OverviewConfig(verbose=True))
        >>> result = converter.convert('<a><b/><b/></a>')
        >>> result.text
        '<a><b/><!-- 1 more <b> omitted --></a>'
    """

    def __init__(self, config: Optional[OverviewConfig] = None) -> None:
        self.config = config or OverviewConfig()
        self.correlation_id = self.config.correlation_id or str(uuid.uuid4())
        self.logger = get_logger(__name__, self.correlation_id, "xml_overview")

    def convert(self, text: str) -> OverviewResult:
        """Convert document text into an overview.

        Args:
            text: Complete document text

        Returns:
            OverviewResult with the final text and intermediate artifacts

        Raises:
            LexError: If the document cannot be scanned
            BuildError: If the tokens cannot be assembled into a tree
        """
        self.logger.info("Starting overview conversion", extra={"content_length": len(text)})
        metrics = PerformanceMetrics(characters_processed=len(text))
        memory_before = current_memory_usage()

        if self.config.normalize_line_endings:
            text = text.replace("\r\n", "\n")

        stage = "scan"
        try:
            start = time.time()
            tokens = MarkupScanner(self.correlation_id).scan(text)
            metrics.scan_time_ms = (time.time() - start) * MS_PER_SECOND
            metrics.tokens_generated = len(tokens)

            stage = "build"
            start = time.time()
            graph = TreeBuilder(
                correlation_id=self.correlation_id,
                require_balanced_tags=self.config.require_balanced_tags,
                validate_closing_names=self.config.validate_closing_names,
            ).build(tokens)
            metrics.build_time_ms = (time.time() - start) * MS_PER_SECOND
            metrics.elements_built = graph.element_count

            stage = "minimize"
            stats = None
            if self.config.minimize:
                stats = Minimizer(self.correlation_id).minimize(graph)
                metrics.minimize_time_ms = stats.processing_time_ms
                metrics.nodes_removed = stats.nodes_removed

            graph_issues = self._check_graph(graph)

            stage = "render"
            start = time.time()
            rendered = OverviewRenderer(
                verbose=self.config.verbose,
                max_depth=self.config.max_depth,
                correlation_id=self.correlation_id,
            ).render(graph)
            metrics.render_time_ms = (time.time() - start) * MS_PER_SECOND

        except OverviewError:
            self.logger.exception("Overview conversion failed", extra={"stage": stage})
            raise

        metrics.memory_used_bytes = max(0, current_memory_usage() - memory_before)
        output = strip_synthetic_root(rendered) if self.config.strip_root else rendered

        result = OverviewResult(
            text=output,
            rendered=rendered,
            graph=graph,
            tokens=tokens,
            minimization=stats,
            performance=metrics,
            correlation_id=self.correlation_id,
        )
        self._add_diagnostics(result)
        for issue in graph_issues:
            result.add_diagnostic(DiagnosticSeverity.ERROR, issue, "tree_validation")

        self.logger.info(
            "Overview conversion completed",
            extra={
                "token_count": metrics.tokens_generated,
                "elements_built": metrics.elements_built,
                "nodes_removed": metrics.nodes_removed,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        return result

    def convert_file(self, file_path: Union[str, Path]) -> OverviewResult:
        """Read a document from disk and convert it.

        Raises:
            OSError: If the file cannot be read
            DocumentEncodingError: If the file is not valid UTF-8
        """
        path_obj = Path(file_path)
        self.logger.info("Reading document", extra={"file_path": str(path_obj)})
        return self.convert(decode_document(path_obj.read_bytes()))

    def _check_graph(self, graph: Graph) -> List[str]:
        """Run the structural graph checks when debug logging is enabled."""
        if not self.logger.logger.isEnabledFor(logging.DEBUG):
            return []
        issues = validate_graph(graph)
        self.logger.debug("Graph validated", extra={"issue_count": len(issues)})
        return issues

    def _add_diagnostics(self, result: OverviewResult) -> None:
        metrics = result.performance
        if metrics.elements_built == 0:
            result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                "Document contains no elements",
                "tree_builder",
            )
        if result.minimization and result.minimization.nodes_removed:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                f"Collapsed {result.minimization.nodes_removed} repeated sibling "
                f"elements in {result.minimization.groups_collapsed} groups",
                "minimizer",
                details={"reduction_ratio": metrics.reduction_ratio},
            )
        if self.config.max_depth is not None and result.graph.max_depth > self.config.max_depth:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                f"Elements below depth {self.config.max_depth} were not rendered",
                "renderer",
                details={"document_depth": result.graph.max_depth},
            )


def overview_string(text: str, config: Optional[OverviewConfig] = None) -> str:
    """Produce the overview of document text.

    Examples:
        >>> overview_string('<list><item id="1">a</item><item id="2">b</item></list>')
        '<list><item id="">a</item></list>'
    """
    return XMLOverview(config).convert(text).text


def overview_file(
    file_path: Union[str, Path], config: Optional[OverviewConfig] = None
) -> str:
    """Produce the overview of a document stored on disk."""
    return XMLOverview(config).convert_file(file_path).text


def overview(input_data: InputType, config: Optional[OverviewConfig] = None) -> str:
    """Produce an overview from text, raw bytes or a file path.

    Args:
        input_data: Document text, UTF-8 bytes, or Path to a document
        config: Optional pipeline configuration

    Returns:
        Overview text without the synthetic root wrapper
    """
    if isinstance(input_data, Path):
        return overview_file(input_data, config)
    if isinstance(input_data, bytes):
        return overview_string(decode_document(input_data), config)
    if isinstance(input_data, str):
        return overview_string(input_data, config)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")

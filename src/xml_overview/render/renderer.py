"""Text rendering of an element graph.

Elements are written with attribute names only (``name=""``), childless
elements are self-closed, consecutive newlines are collapsed and comments are
dropped unless rendering verbosely. The synthetic root is written like any
other element, as ``<>...</>``.
"""

import time
from typing import Any, List, Optional, Tuple

from xml_overview.shared import get_logger
from xml_overview.tokenization import Token, TokenType
from xml_overview.tree import ROOT_ID, Graph, Node

_NODE = "node"
_LEAF = "leaf"
_LITERAL = "literal"

WorkItem = Tuple[str, Any, int]


class _Output:
    """Append-only text buffer that remembers whether it ends in a newline."""

    def __init__(self) -> None:
        self.parts: List[str] = []
        self.ends_with_newline = False

    def write(self, text: str) -> None:
        if text:
            self.parts.append(text)
            self.ends_with_newline = text.endswith("\n")

    def getvalue(self) -> str:
        return "".join(self.parts)


class OverviewRenderer:
    """Renders a graph depth-first into overview text.

    Args:
        verbose: Keep comments and annotate collapsed siblings
        max_depth: Render elements at this depth without their children
            (top-level document elements are depth 1); None for no limit
        correlation_id: Optional correlation ID for conversion tracking
    """

    def __init__(
        self,
        verbose: bool = False,
        max_depth: Optional[int] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.verbose = verbose
        self.max_depth = max_depth
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "renderer")

    def render(self, graph: Graph) -> str:
        """Render the graph starting at the synthetic root."""
        start_time = time.time()
        out = _Output()

        stack: List[WorkItem] = [(_NODE, ROOT_ID, 0)]
        while stack:
            kind, item, depth = stack.pop()
            if kind == _NODE:
                self._render_node(graph, graph.node(item), depth, out, stack)
            elif kind == _LEAF:
                self._render_leaf(item, out)
            else:
                out.write(item)

        rendered = out.getvalue()
        self.logger.debug(
            "Rendering completed",
            extra={
                "output_length": len(rendered),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return rendered

    def _render_node(
        self,
        graph: Graph,
        node: Node,
        depth: int,
        out: _Output,
        stack: List[WorkItem]
    ) -> None:
        tag = " ".join([node.name] + [f'{key}=""' for key in node.keys])
        truncated = (
            self.max_depth is not None
            and depth >= self.max_depth
            and bool(node.children)
        )

        if not node.children or truncated:
            out.write(f"<{tag}/>")
            if truncated and self.verbose and node.node_child_count:
                out.write(self._truncation_note(node))
            out.write(self._omitted_annotation(node))
            return

        out.write(f"<{tag}>")
        stack.append((_LITERAL, f"</{node.name}>" + self._omitted_annotation(node), depth))
        for child in reversed(node.children):
            if isinstance(child, int):
                stack.append((_NODE, child, depth + 1))
            else:
                stack.append((_LEAF, child, depth))

    def _render_leaf(self, token: Token, out: _Output) -> None:
        if token.type == TokenType.TEXT:
            out.write(token.value)
        elif token.type == TokenType.WHITESPACE:
            out.write(" ")
        elif token.type == TokenType.NEWLINE:
            if not out.ends_with_newline:
                out.write("\n")
        elif token.type == TokenType.COMMENT and self.verbose:
            out.write(f"<!--{token.value}-->")
        # Attribute keys and values stranded outside a tag are never shown

    def _truncation_note(self, node: Node) -> str:
        count = node.node_child_count
        noun = "child element" if count == 1 else "child elements"
        return f"<!-- {count} {noun} below depth {self.max_depth} not shown -->"

    def _omitted_annotation(self, node: Node) -> str:
        if not self.verbose or not node.omitted:
            return ""
        return f"<!-- {node.omitted} more <{node.name}> omitted -->"


def render(
    graph: Graph,
    verbose: bool = False,
    max_depth: Optional[int] = None,
    correlation_id: Optional[str] = None
) -> str:
    """Render a graph with a one-off OverviewRenderer."""
    return OverviewRenderer(verbose, max_depth, correlation_id).render(graph)

"""Structural minimizer that collapses repeated sibling shapes.

Siblings are grouped by shape key (element name plus attribute names in
declared order). Each group keeps a single representative: the member with the
most immediate element children, the earliest in document order on ties.
Decisions are made top-down on the unminimized child counts, and only the
representatives are descended into.
"""

import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from xml_overview.shared import get_logger

from .graph import ROOT_ID, Graph, Node


@dataclass
class MinimizationStats:
    """Counters describing one minimization pass."""

    nodes_examined: int = 0
    nodes_removed: int = 0
    groups_collapsed: int = 0
    processing_time_ms: float = 0.0

    @property
    def nodes_kept(self) -> int:
        return self.nodes_examined - self.nodes_removed


class Minimizer:
    """Collapses same-shape siblings in place.

    Dropped nodes stay in the graph's arena but are no longer referenced by
    any parent. Running the minimizer again on its own output changes nothing.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "minimizer")

    def minimize(self, graph: Graph) -> MinimizationStats:
        """Minimize the whole graph.

        Args:
            graph: Graph to rewrite in place

        Returns:
            MinimizationStats for the pass
        """
        start_time = time.time()
        stats = MinimizationStats()

        stack = [ROOT_ID]
        while stack:
            node = graph.node(stack.pop())
            kept = self._collapse_children(graph, node, stats)
            stack.extend(reversed(kept))

        stats.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.info(
            "Minimization completed",
            extra={
                "nodes_examined": stats.nodes_examined,
                "nodes_removed": stats.nodes_removed,
                "groups_collapsed": stats.groups_collapsed,
                "processing_time_ms": stats.processing_time_ms,
            }
        )
        return stats

    def _collapse_children(
        self, graph: Graph, node: Node, stats: MinimizationStats
    ) -> List[int]:
        """Drop every node child that is not its group's representative.

        Returns:
            Identities of the retained node children, in order
        """
        representatives: Dict[str, int] = {}
        group_sizes: Dict[str, int] = {}

        for child_id in node.child_ids:
            child = graph.node(child_id)
            key = child.shape_key
            stats.nodes_examined += 1
            group_sizes[key] = group_sizes.get(key, 0) + 1

            best = representatives.get(key)
            # Strictly greater, so the first seen wins ties
            if best is None or child.node_child_count > graph.node(best).node_child_count:
                representatives[key] = child_id

        keep = set(representatives.values())
        node.children = [
            child for child in node.children
            if not isinstance(child, int) or child in keep
        ]

        for key, representative_id in representatives.items():
            dropped = group_sizes[key] - 1
            if dropped:
                graph.node(representative_id).omitted += dropped
                stats.nodes_removed += dropped
                stats.groups_collapsed += 1

        return node.child_ids


def minimize(graph: Graph, correlation_id: Optional[str] = None) -> MinimizationStats:
    """Minimize a graph in place with a one-off Minimizer."""
    return Minimizer(correlation_id).minimize(graph)

"""Structural invariant checks for element graphs."""

from typing import Dict, List

from .graph import ROOT_ID, Graph


def validate_graph(graph: Graph) -> List[str]:
    """Check that a graph is a proper tree rooted at the synthetic root.

    Verifies that the root has no parent, that every referenced child exists,
    is referenced by exactly one parent and points back at it, and that every
    reachable parent chain ends at the root without cycles.

    Args:
        graph: Graph to inspect

    Returns:
        Human-readable descriptions of every violation; empty if valid
    """
    issues: List[str] = []

    if graph.root.parent is not None:
        issues.append("Synthetic root must not have a parent")

    referenced_by: Dict[int, int] = {}
    for node in graph.nodes.values():
        for child_id in node.child_ids:
            if child_id not in graph.nodes:
                issues.append(f"Node {node.id} references missing child {child_id}")
                continue
            if child_id in referenced_by:
                issues.append(
                    f"Node {child_id} is a child of both {referenced_by[child_id]} "
                    f"and {node.id}"
                )
                continue
            referenced_by[child_id] = node.id
            if graph.nodes[child_id].parent != node.id:
                issues.append(
                    f"Node {child_id} is listed under {node.id} but its parent is "
                    f"{graph.nodes[child_id].parent}"
                )

    if ROOT_ID in referenced_by:
        issues.append("Synthetic root is referenced as a child")

    for node_id in referenced_by:
        seen = {node_id}
        parent = graph.nodes[node_id].parent
        while parent is not None and parent != ROOT_ID:
            if parent in seen or parent not in graph.nodes:
                issues.append(f"Parent chain of node {node_id} does not reach the root")
                break
            seen.add(parent)
            parent = graph.nodes[parent].parent
        else:
            if parent is None:
                issues.append(f"Parent chain of node {node_id} does not reach the root")

    return issues

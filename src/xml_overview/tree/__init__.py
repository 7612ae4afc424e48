"""Tree layer for the overview pipeline.

Key Components:
    Graph: Arena of Nodes addressed by identity, with a current-node cursor
    Node: Single element with name, attribute names and ordered children
    TreeBuilder: Single-pass builder from token sequence to Graph
    Minimizer: Collapses repeated sibling shapes to one representative
"""

from .builder import TreeBuilder, build_graph
from .graph import ROOT_ID, ChildEntry, Graph, Node
from .minimizer import MinimizationStats, Minimizer, minimize
from .validation import validate_graph

__all__ = [
    "ChildEntry",
    "Graph",
    "MinimizationStats",
    "Minimizer",
    "Node",
    "ROOT_ID",
    "TreeBuilder",
    "build_graph",
    "minimize",
    "validate_graph",
]

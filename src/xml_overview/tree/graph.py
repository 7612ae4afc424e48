"""Arena-backed element tree.

Nodes live in a single dictionary keyed by integer identity and refer to each
other only by identity: a node's children are identities (or embedded leaf
tokens) and its parent is an identity. The graph owns a "current" cursor that
the tree builder moves down with ``add_node`` and up with ``close_current``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from xml_overview.tokenization import Token

ROOT_ID = 0

ChildEntry = Union[int, Token]

DECLARATION_PREFIXES = ("?", "!")


@dataclass(eq=False)
class Node:
    """One element: name, attribute names and ordered children.

    Attribute values are never stored. ``omitted`` counts same-shape siblings
    that the minimizer collapsed into this node.
    """

    id: int
    name: str
    keys: List[str] = field(default_factory=list)
    parent: Optional[int] = None
    children: List[ChildEntry] = field(default_factory=list)
    omitted: int = 0

    @property
    def is_root(self) -> bool:
        """Check if this is the synthetic root."""
        return self.parent is None

    @property
    def is_declaration(self) -> bool:
        """Check if this is a prolog declaration or processing instruction."""
        return self.name.startswith(DECLARATION_PREFIXES)

    @property
    def shape_key(self) -> str:
        """Name followed by attribute names in declared order, comma-joined."""
        return ",".join([self.name, *self.keys])

    @property
    def child_ids(self) -> List[int]:
        """Identities of the node children, in order."""
        return [child for child in self.children if isinstance(child, int)]

    @property
    def node_child_count(self) -> int:
        """Number of immediate node (non-leaf) children."""
        return sum(1 for child in self.children if isinstance(child, int))


class Graph:
    """Rooted, ordered tree of Nodes addressed by identity."""

    def __init__(self) -> None:
        self.nodes: Dict[int, Node] = {ROOT_ID: Node(id=ROOT_ID, name="")}
        self.current_id = ROOT_ID
        self._next_id = ROOT_ID + 1

    @property
    def root(self) -> Node:
        """The synthetic root node wrapping the whole document."""
        return self.nodes[ROOT_ID]

    @property
    def current(self) -> Node:
        """The node new children are attached to."""
        return self.nodes[self.current_id]

    @property
    def at_root(self) -> bool:
        """Check if the cursor is on the synthetic root."""
        return self.current_id == ROOT_ID

    def node(self, node_id: int) -> Node:
        """Get node by identity."""
        return self.nodes[node_id]

    def add_node(self, name: str, keys: List[str]) -> Node:
        """Create a child of the current node and move the cursor onto it."""
        node = Node(
            id=self._next_id,
            name=name,
            keys=list(keys),
            parent=self.current_id,
        )
        self._next_id += 1
        self.nodes[node.id] = node
        self.current.children.append(node.id)
        self.current_id = node.id
        return node

    def close_current(self) -> Node:
        """Move the cursor to the current node's parent.

        Returns:
            The node that was closed

        Raises:
            ValueError: If the cursor is already on the root
        """
        closed = self.current
        if closed.parent is None:
            raise ValueError("Cannot close the synthetic root")
        self.current_id = closed.parent
        return closed

    def add_leaf(self, token: Token) -> None:
        """Append a token as leaf content of the current node."""
        self.current.children.append(token)

    def children_of(self, node_id: int) -> List[Node]:
        """Get the node children of a node, in order."""
        return [self.nodes[child_id] for child_id in self.nodes[node_id].child_ids]

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over nodes reachable from the root in document order."""
        stack = [ROOT_ID]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.child_ids))

    def depth(self, node_id: int) -> int:
        """Get depth of a node (root = 0)."""
        depth = 0
        node = self.nodes[node_id]
        while node.parent is not None:
            depth += 1
            node = self.nodes[node.parent]
        return depth

    @property
    def element_count(self) -> int:
        """Number of reachable elements, excluding the synthetic root."""
        return sum(1 for node in self.iter_nodes() if not node.is_root)

    @property
    def max_depth(self) -> int:
        """Depth of the deepest reachable element."""
        depths = {ROOT_ID: 0}
        for node in self.iter_nodes():
            if node.parent is not None:
                depths[node.id] = depths[node.parent] + 1
        return max(depths.values())

    def to_dict(self, node_id: int = ROOT_ID) -> Dict[str, Any]:
        """Convert a subtree to dictionary representation."""
        node = self.nodes[node_id]
        result: Dict[str, Any] = {"name": node.name, "keys": list(node.keys)}
        if node.omitted:
            result["omitted"] = node.omitted

        children: List[Any] = []
        for child in node.children:
            if isinstance(child, int):
                children.append(self.to_dict(child))
            else:
                children.append({"token": child.type.name, "value": child.value})
        if children:
            result["children"] = children

        return result

"""Single-pass tree builder.

Turns the scanner's flat token list into a Graph. There is no element stack:
the graph's current-node cursor descends when an element opens and ascends by
following the parent link when one closes.
"""

import time
from typing import AbstractSet, List, Optional, Sequence

from xml_overview.shared import (
    ClosingTagMismatchError,
    EmptyInputError,
    NoClosingTagError,
    UnexpectedClosingTagError,
    get_logger,
)
from xml_overview.tokenization import Token, TokenType

from .graph import Graph

_TAG_BOUNDARY_TYPES = frozenset({TokenType.TAG_CLOSING, TokenType.TAG_SELF_CLOSING})
_CLOSING_TYPES = frozenset({TokenType.TAG_CLOSING})


class TreeBuilder:
    """Builds an element graph from a token sequence.

    Closing tag names are not checked against the open element unless
    ``validate_closing_names`` is set; ``</b>`` simply closes whatever element
    is current.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        require_balanced_tags: bool = True,
        validate_closing_names: bool = False
    ) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for conversion tracking
            require_balanced_tags: Fail if elements are still open at the end
            validate_closing_names: Fail if a closing tag names another element
        """
        self.correlation_id = correlation_id
        self.require_balanced_tags = require_balanced_tags
        self.validate_closing_names = validate_closing_names
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self._elements_created = 0

    def build(self, tokens: Sequence[Token]) -> Graph:
        """Build the element graph.

        Args:
            tokens: Tokens in document order

        Returns:
            Graph rooted at the synthetic root

        Raises:
            EmptyInputError: If there are no tokens
            NoClosingTagError: If a tag has no terminating marker, or elements
                remain open and balanced tags are required
            UnexpectedClosingTagError: If a closing marker has nothing to close
            ClosingTagMismatchError: If closing names are validated and differ
        """
        start_time = time.time()
        if not tokens:
            raise EmptyInputError()

        self.logger.debug("Starting tree building", extra={"token_count": len(tokens)})
        self._elements_created = 0
        graph = Graph()

        index: Optional[int] = 0
        while index is not None and index < len(tokens):
            token = tokens[index]
            if token.type == TokenType.TAG_OPEN_START:
                index = self._open_element(graph, tokens, index)
            elif token.type == TokenType.TAG_CLOSE_START:
                index = self._close_element(graph, tokens, index)
            elif token.type == TokenType.TAG_CLOSING:
                index = self._attach_body(graph, tokens, index)
            elif token.type == TokenType.TAG_SELF_CLOSING:
                self._ascend(graph, index)
                index += 1
            else:
                graph.add_leaf(token)
                index += 1

        if self.require_balanced_tags and not graph.at_root:
            raise NoClosingTagError(graph.current.name)

        self.logger.info(
            "Tree building completed",
            extra={
                "element_count": self._elements_created,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return graph

    def _open_element(self, graph: Graph, tokens: Sequence[Token], index: int) -> int:
        """Create the element and resume at its ">" or "/>" marker."""
        boundary = _find(tokens, index + 1, _TAG_BOUNDARY_TYPES)
        if boundary is None:
            raise NoClosingTagError(tokens[index].value, index)

        keys = [
            token.value.strip()
            for token in tokens[index + 1:boundary]
            if token.type == TokenType.KEY
        ]
        node = graph.add_node(tokens[index].value, keys)
        self._elements_created += 1

        # Declarations never take a body, so they end at their own ">"
        if node.is_declaration and tokens[boundary].type == TokenType.TAG_CLOSING:
            graph.close_current()

        return boundary

    def _close_element(self, graph: Graph, tokens: Sequence[Token], index: int) -> int:
        closing = _find(tokens, index + 1, _CLOSING_TYPES)
        if closing is None:
            raise NoClosingTagError(tokens[index].value, index)

        name = tokens[index].value
        if (
            self.validate_closing_names
            and not graph.at_root
            and name != graph.current.name
        ):
            raise ClosingTagMismatchError(graph.current.name, name, index)

        self._ascend(graph, index)
        return closing + 1

    def _attach_body(
        self, graph: Graph, tokens: Sequence[Token], index: int
    ) -> Optional[int]:
        """Attach content up to the next tag start; None at end of document."""
        next_tag = _find_tag_start(tokens, index + 1)
        if next_tag is None:
            return None

        for token in tokens[index + 1:next_tag]:
            if token.is_content:
                graph.add_leaf(token)

        return next_tag

    def _ascend(self, graph: Graph, index: int) -> None:
        if graph.at_root:
            raise UnexpectedClosingTagError(index)
        graph.close_current()


def _find(
    tokens: Sequence[Token], start: int, types: AbstractSet[TokenType]
) -> Optional[int]:
    for position in range(start, len(tokens)):
        if tokens[position].type in types:
            return position
    return None


def _find_tag_start(tokens: Sequence[Token], start: int) -> Optional[int]:
    for position in range(start, len(tokens)):
        if tokens[position].is_tag_start:
            return position
    return None


def build_graph(
    tokens: List[Token],
    correlation_id: Optional[str] = None,
    require_balanced_tags: bool = True,
    validate_closing_names: bool = False
) -> Graph:
    """Build an element graph from tokens with a one-off TreeBuilder."""
    builder = TreeBuilder(
        correlation_id=correlation_id,
        require_balanced_tags=require_balanced_tags,
        validate_closing_names=validate_closing_names,
    )
    return builder.build(tokens)

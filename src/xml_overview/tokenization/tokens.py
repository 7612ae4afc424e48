"""Token definitions produced by the markup scanner."""

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    """Lexical units recognized in a markup document."""

    TAG_OPEN_START = auto()     # "<name"
    TAG_CLOSE_START = auto()    # "</name"
    TAG_SELF_CLOSING = auto()   # "/>"
    TAG_CLOSING = auto()        # ">"
    KEY = auto()                # attribute name up to "="
    STRING_LITERAL = auto()     # double-quoted attribute value
    COMMENT = auto()            # <!-- ... -->
    WHITESPACE = auto()         # single space or tab
    NEWLINE = auto()            # single "\n"
    TEXT = auto()               # character content between tags


# Token types that may be attached to a node as body content
CONTENT_TYPES = frozenset({
    TokenType.TEXT,
    TokenType.WHITESPACE,
    TokenType.NEWLINE,
    TokenType.COMMENT,
})

TAG_START_TYPES = frozenset({
    TokenType.TAG_OPEN_START,
    TokenType.TAG_CLOSE_START,
})


@dataclass(frozen=True)
class Token:
    """A single immutable lexical unit.

    ``value`` holds the tag name, key name, string contents, comment contents
    or text; it is empty for markers, whitespace and newlines. ``offset`` is
    the position in the source text and does not take part in equality.
    """

    type: TokenType
    value: str = ""
    offset: int = field(default=0, compare=False)

    @property
    def is_tag_start(self) -> bool:
        """Check if this token opens either an opening or a closing tag."""
        return self.type in TAG_START_TYPES

    @property
    def is_content(self) -> bool:
        """Check if this token can be body content of an element."""
        return self.type in CONTENT_TYPES

    def __str__(self) -> str:
        if self.value:
            return f"{self.type.name}({self.value!r})"
        return self.type.name

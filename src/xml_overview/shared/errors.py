"""Exception hierarchy for the overview pipeline.

A failing stage raises one of these and the remaining stages never run; there
is no partial-result mode.
"""

from typing import Optional

PREVIEW_LENGTH = 40  # Max characters of unmatched input quoted in messages


class OverviewError(Exception):
    """Base exception for every overview pipeline failure."""


class LexError(OverviewError):
    """No recognizer matched at the scanner's current position."""

    def __init__(self, remainder: str, offset: int, line: int, column: int) -> None:
        self.remainder = remainder
        self.offset = offset
        self.line = line
        self.column = column
        preview = remainder[:PREVIEW_LENGTH]
        if len(remainder) > PREVIEW_LENGTH:
            preview += "..."
        super().__init__(
            f"Unexpected input at line {line}, column {column}: {preview!r}"
        )


class BuildError(OverviewError):
    """The token stream could not be assembled into a tree."""


class EmptyInputError(BuildError):
    """The tree builder received no tokens."""

    def __init__(self) -> None:
        super().__init__("No tokens to build a tree from")


class NoClosingTagError(BuildError):
    """A tag never found its terminating marker, or an element was never closed."""

    def __init__(self, tag_name: str, token_index: Optional[int] = None) -> None:
        self.tag_name = tag_name
        self.token_index = token_index
        if token_index is None:
            message = f"Element <{tag_name}> is never closed"
        else:
            message = (
                f"Tag <{tag_name}> at token {token_index} has no closing marker"
            )
        super().__init__(message)


class UnexpectedClosingTagError(BuildError):
    """A closing marker was found while no element was open."""

    def __init__(self, token_index: int) -> None:
        self.token_index = token_index
        super().__init__(
            f"Closing marker at token {token_index} has no open element to close"
        )


class ClosingTagMismatchError(BuildError):
    """A closing tag named a different element than the one currently open."""

    def __init__(self, expected: str, found: str, token_index: int) -> None:
        self.expected = expected
        self.found = found
        self.token_index = token_index
        super().__init__(
            f"Closing tag </{found}> at token {token_index} does not match "
            f"open element <{expected}>"
        )


class DocumentEncodingError(OverviewError):
    """The document bytes are not valid UTF-8."""

    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(f"Document is not valid UTF-8 at byte {position}: {reason}")

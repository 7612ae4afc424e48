"""Priority-ordered markup scanner.

The scanner walks a cursor over the document and, at every position, tries a
fixed list of recognizers in order; the first one that matches produces the
next token. There is no grammar state: whether ``name=`` is an attribute key
or ``a > b`` is text depends only on which recognizer gets to the input first,
so the order of ``_recognizers`` and the lookahead boundaries below must be
kept exactly as they are.
"""

import time
from typing import Callable, List, Optional, Tuple

from xml_overview.shared import LexError, get_logger

from .tokens import Token, TokenType

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
CLOSE_TAG_PREFIX = "</"
OPEN_TAG_PREFIX = "<"
SELF_CLOSING_MARKER = "/>"
CLOSING_MARKER = ">"
QUOTE = '"'
KEY_TERMINATOR = "="
WHITESPACE_CHARS = (" ", "\t")
NEWLINE_CHAR = "\n"

Match = Optional[Tuple[Token, int]]


class MarkupScanner:
    """Turns document text into a flat token list.

    Every recognizer takes the cursor position and returns the matched token
    together with the position just past it, or None. Lookahead checks
    (``_at_*``) answer "would this recognizer match here" without building a
    token.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the scanner.

        Args:
            correlation_id: Optional correlation ID for conversion tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_scanner")
        self._text = ""
        self._length = 0
        self._last_quote = -1
        self._dangling_quote = -1
        self._previous_type: Optional[TokenType] = None
        self._last_comment_close = -1
        self._recognizers: List[Callable[[int], Match]] = [
            self._lex_comment,
            self._lex_string,
            self._lex_tag_close_start,
            self._lex_tag_open_start,
            self._lex_tag_self_closing,
            self._lex_tag_closing,
            self._lex_whitespace,
            self._lex_newline,
            self._lex_key,
            self._lex_text,
        ]

    def scan(self, text: str) -> List[Token]:
        """Scan the whole document.

        Args:
            text: Complete document text

        Returns:
            Tokens in document order; empty for empty input

        Raises:
            LexError: If no recognizer matches at some position
        """
        start_time = time.time()
        self._reset(text)
        self.logger.debug("Starting scan", extra={"char_count": self._length})

        tokens: List[Token] = []
        pos = 0
        while pos < self._length:
            match = self._next_token(pos)
            if match is None:
                self.logger.debug(
                    "No recognizer matched",
                    extra={"offset": pos, "token_count": len(tokens)}
                )
                raise self._lex_error(pos)
            token, pos = match
            tokens.append(token)
            self._previous_type = token.type

        self.logger.debug(
            "Scan completed",
            extra={
                "token_count": len(tokens),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return tokens

    def _reset(self, text: str) -> None:
        self._text = text
        self._length = len(text)
        # A quote or comment opener can only match if a closer exists after it,
        # which is known once the last closer in the document is located.
        self._last_quote = text.rfind(QUOTE)
        # With an odd number of quotes the last one has no partner
        self._dangling_quote = (
            self._last_quote if text.count(QUOTE) % 2 == 1 else -1
        )
        self._last_comment_close = text.rfind(COMMENT_CLOSE)
        self._previous_type = None

    def _next_token(self, pos: int) -> Match:
        for recognizer in self._recognizers:
            match = recognizer(pos)
            if match is not None:
                return match
        return None

    def _lex_error(self, pos: int) -> LexError:
        line = self._text.count(NEWLINE_CHAR, 0, pos) + 1
        column = pos - (self._text.rfind(NEWLINE_CHAR, 0, pos) + 1) + 1
        return LexError(self._text[pos:], pos, line, column)

    # Lookahead checks

    def _at_comment(self, pos: int) -> bool:
        return (
            self._text.startswith(COMMENT_OPEN, pos)
            and self._last_comment_close >= pos + len(COMMENT_OPEN)
        )

    def _at_string(self, pos: int) -> bool:
        return self._text.startswith(QUOTE, pos) and self._last_quote > pos

    def _at_unterminated_quote(self, pos: int) -> bool:
        """Check for an unpaired quote that ends the document."""
        return pos == self._dangling_quote and pos == self._length - 1

    def _at_unquoted_value(self, pos: int) -> bool:
        """Check for an attribute value whose closing quote is missing."""
        return pos == self._dangling_quote and self._previous_type == TokenType.KEY

    def _at_tag_close_start(self, pos: int) -> bool:
        return self._text.startswith(CLOSE_TAG_PREFIX, pos)

    def _at_tag_open_start(self, pos: int) -> bool:
        return (
            self._text.startswith(OPEN_TAG_PREFIX, pos)
            and not self._text.startswith(CLOSE_TAG_PREFIX, pos)
        )

    def _at_self_closing(self, pos: int) -> bool:
        return self._text.startswith(SELF_CLOSING_MARKER, pos)

    def _at_closing(self, pos: int) -> bool:
        return self._text.startswith(CLOSING_MARKER, pos)

    def _at_whitespace(self, pos: int) -> bool:
        return pos < self._length and self._text[pos] in WHITESPACE_CHARS

    def _at_newline(self, pos: int) -> bool:
        return self._text.startswith(NEWLINE_CHAR, pos)

    def _at_tag_name_boundary(self, pos: int) -> bool:
        return (
            self._at_self_closing(pos)
            or self._at_closing(pos)
            or self._at_comment(pos)
            or self._at_whitespace(pos)
            or self._at_newline(pos)
        )

    def _at_key_boundary(self, pos: int) -> bool:
        return (
            self._at_tag_open_start(pos)
            or self._at_tag_close_start(pos)
            or self._at_self_closing(pos)
            or self._at_closing(pos)
            or self._at_comment(pos)
            or self._at_string(pos)
        )

    def _at_text_boundary(self, pos: int) -> bool:
        return (
            self._at_tag_open_start(pos)
            or self._at_tag_close_start(pos)
            or self._at_self_closing(pos)
            or self._at_closing(pos)
            or self._at_comment(pos)
            or self._at_unterminated_quote(pos)
        )

    # Recognizers, in priority order

    def _lex_comment(self, pos: int) -> Match:
        if not self._at_comment(pos):
            return None
        body_start = pos + len(COMMENT_OPEN)
        body_end = self._text.find(COMMENT_CLOSE, body_start)
        token = Token(TokenType.COMMENT, self._text[body_start:body_end], pos)
        return token, body_end + len(COMMENT_CLOSE)

    def _lex_string(self, pos: int) -> Match:
        if not self._at_string(pos):
            return None
        end = self._text.find(QUOTE, pos + 1)
        return Token(TokenType.STRING_LITERAL, self._text[pos + 1:end], pos), end + 1

    def _lex_tag_close_start(self, pos: int) -> Match:
        if not self._at_tag_close_start(pos):
            return None
        name, end = self._scan_tag_name(pos + len(CLOSE_TAG_PREFIX))
        return Token(TokenType.TAG_CLOSE_START, name, pos), end

    def _lex_tag_open_start(self, pos: int) -> Match:
        if not self._at_tag_open_start(pos):
            return None
        name, end = self._scan_tag_name(pos + len(OPEN_TAG_PREFIX))
        return Token(TokenType.TAG_OPEN_START, name, pos), end

    def _scan_tag_name(self, start: int) -> Tuple[str, int]:
        end = start
        while end < self._length and not self._at_tag_name_boundary(end):
            end += 1
        return self._text[start:end], end

    def _lex_tag_self_closing(self, pos: int) -> Match:
        if not self._at_self_closing(pos):
            return None
        return Token(TokenType.TAG_SELF_CLOSING, offset=pos), pos + len(SELF_CLOSING_MARKER)

    def _lex_tag_closing(self, pos: int) -> Match:
        if not self._at_closing(pos):
            return None
        return Token(TokenType.TAG_CLOSING, offset=pos), pos + len(CLOSING_MARKER)

    def _lex_whitespace(self, pos: int) -> Match:
        if not self._at_whitespace(pos):
            return None
        return Token(TokenType.WHITESPACE, offset=pos), pos + 1

    def _lex_newline(self, pos: int) -> Match:
        if not self._at_newline(pos):
            return None
        return Token(TokenType.NEWLINE, offset=pos), pos + 1

    def _lex_key(self, pos: int) -> Match:
        end = pos
        while end < self._length:
            if self._at_key_boundary(end):
                return None
            if self._text.startswith(KEY_TERMINATOR, end):
                token = Token(TokenType.KEY, self._text[pos:end], pos)
                return token, end + len(KEY_TERMINATOR)
            end += 1
        return None

    def _lex_text(self, pos: int) -> Match:
        if self._at_unquoted_value(pos):
            return None
        end = pos
        while end < self._length and not self._at_text_boundary(end):
            end += 1
        if end == pos:
            return None
        return Token(TokenType.TEXT, self._text[pos:end], pos), end


def scan(text: str, correlation_id: Optional[str] = None) -> List[Token]:
    """Scan document text into tokens.

    Args:
        text: Complete document text
        correlation_id: Optional correlation ID for conversion tracking

    Returns:
        Tokens in document order

    Raises:
        LexError: If some part of the input matches no recognizer
    """
    return MarkupScanner(correlation_id).scan(text)

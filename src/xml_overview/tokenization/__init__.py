"""Tokenization layer for the overview pipeline.

Key Components:
    MarkupScanner: Priority-ordered recognizer scanner over document text
    Token: Immutable lexical unit with type, value and source offset
    TokenType: Enumeration of the ten token kinds
"""

from .scanner import MarkupScanner, scan
from .tokens import CONTENT_TYPES, TAG_START_TYPES, Token, TokenType

__all__ = [
    "CONTENT_TYPES",
    "MarkupScanner",
    "TAG_START_TYPES",
    "Token",
    "TokenType",
    "scan",
]

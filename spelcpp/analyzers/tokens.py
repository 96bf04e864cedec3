"""Classification of raw lexical tokens."""

from __future__ import annotations

from typing import Tuple

from ..models import LexicalTag, TokenKind
from ..parsing.base import RawToken


def classify(token: RawToken) -> Tuple[TokenKind, str]:
    """Return the token's kind and its display text.

    Only plain double-quoted literals count as string literals; numeric,
    character and prefixed literals come back as ``OTHER``.
    """
    text = token.spelling
    tag = token.tag
    if tag is LexicalTag.COMMENT:
        return TokenKind.COMMENT, text
    if tag is LexicalTag.LITERAL and text.startswith('"'):
        return TokenKind.STRING_LITERAL, text
    return TokenKind.OTHER, text


__all__ = ["classify"]

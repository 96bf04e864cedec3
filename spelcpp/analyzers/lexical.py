"""Comment and string literal discovery over a unit's token stream."""

from __future__ import annotations

from .base import UnitPass
from .location import is_system_position
from .tokens import classify
from ..engine import ObservationEngine
from ..models import TokenKind
from ..parsing.base import ParsedUnit


class LexicalPass(UnitPass):
    """Reports comments and string literals outside system headers.

    Unlike definitions, tokens from project headers are reported too.
    """

    name = "lexical"

    def run(self, unit: ParsedUnit, engine: ObservationEngine) -> None:
        for token in unit.tokens():
            position = token.position
            if position is None or is_system_position(position):
                continue
            kind, text = classify(token)
            if not text:
                continue
            if kind is TokenKind.COMMENT:
                engine.observe_comment(text, position.file, position.line, position.column)
            elif kind is TokenKind.STRING_LITERAL:
                engine.observe_string_literal(text, position.file, position.line, position.column)


__all__ = ["LexicalPass"]

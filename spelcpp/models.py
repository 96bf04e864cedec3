"""Core data models shared across spelcpp components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SourcePosition:
    """Presumed location of a token or syntax node.

    ``file``/``line``/``column`` honour ``#line`` directives. ``origin_file``
    is the file the text physically lives in, when the parser knows it.
    """

    file: str
    line: int
    column: int
    in_system_header: bool = field(default=False, compare=False, repr=False)
    origin_file: Optional[str] = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class LexicalTag(Enum):
    """Raw token tag reported by the parser."""

    PUNCTUATION = "punctuation"
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    COMMENT = "comment"


class TokenKind(Enum):
    """Classification of a token for spell-checking purposes."""

    DEFINITION = "definition"
    COMMENT = "comment"
    STRING_LITERAL = "string_literal"
    OTHER = "other"


class ObservationKind(Enum):
    DEFINITION = "definition"
    COMMENT = "comment"
    LITERAL = "literal"


@dataclass(frozen=True)
class Observation:
    """Structured fact emitted by the observation engine."""

    kind: ObservationKind
    text: str
    position: SourcePosition

    @property
    def message(self) -> str:
        """Render the observation in the line format downstream tools scrape."""
        if self.kind is ObservationKind.DEFINITION:
            return f"Found definition for {self.text} in {self.position}"
        if self.kind is ObservationKind.COMMENT:
            return f"Found comment: {self.text} at {self.position}"
        return f"Found literal: {self.text} at {self.position}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "file": self.position.file,
            "line": self.position.line,
            "column": self.position.column,
        }


@dataclass(frozen=True)
class CompileUnitTask:
    """One translation unit: a source file and its effective compiler arguments."""

    source: str
    arguments: Tuple[str, ...] = ()
    directory: Optional[str] = None

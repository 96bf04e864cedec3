"""Interfaces the traversal expects from a parser backend."""

from __future__ import annotations

from typing import ContextManager, Iterable, List, Optional, Protocol

from ..models import CompileUnitTask, LexicalTag, SourcePosition


class SyntaxNode(Protocol):
    """A node of a parsed unit's syntax tree."""

    @property
    def spelling(self) -> str:
        """Spelled name of the entity, or an empty string."""

    @property
    def position(self) -> Optional[SourcePosition]:
        """Presumed location of the node, None when unresolvable."""

    def is_definition(self) -> bool:
        """Return True when the node defines (not merely declares) an entity."""

    def children(self) -> Iterable["SyntaxNode"]:
        """Direct children in source order."""


class RawToken(Protocol):
    """A lexical token from the unit's token stream."""

    @property
    def tag(self) -> LexicalTag: ...

    @property
    def spelling(self) -> str: ...

    @property
    def position(self) -> Optional[SourcePosition]: ...


class ParsedUnit(Protocol):
    """A successfully parsed translation unit."""

    @property
    def primary_file(self) -> str:
        """Path of the unit's own source file."""

    @property
    def root(self) -> SyntaxNode: ...

    def tokens(self) -> Iterable[RawToken]:
        """Tokens over the root node's full extent, in position order."""

    def diagnostics(self) -> List[str]: ...


class UnitParser(Protocol):
    def open(self, task: CompileUnitTask) -> ContextManager[Optional[ParsedUnit]]:
        """Parse ``task``; the context yields None when parsing failed.

        The parsed representation is released when the context exits.
        """

"""Definition discovery over a unit's syntax tree."""

from __future__ import annotations

from typing import Iterator, List

from .base import UnitPass
from .location import is_in_scope
from ..engine import ObservationEngine
from ..parsing.base import ParsedUnit, SyntaxNode


def iter_preorder(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield every node, parents before children, children left to right."""
    stack: List[SyntaxNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        children = list(node.children())
        stack.extend(reversed(children))


class DefinitionPass(UnitPass):
    """Reports named definitions located in the unit's primary file."""

    name = "definitions"

    def run(self, unit: ParsedUnit, engine: ObservationEngine) -> None:
        for node in iter_preorder(unit.root):
            if not node.is_definition():
                continue
            position = node.position
            if position is None or not is_in_scope(position, unit):
                continue
            name = node.spelling
            if not name:
                continue
            engine.observe_definition(name, position.file, position.line, position.column)


__all__ = ["DefinitionPass", "iter_preorder"]

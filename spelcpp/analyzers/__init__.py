"""Traversal passes and pass selection."""

from __future__ import annotations

from typing import List, Sequence, Tuple, Type

from .base import UnitPass
from .definitions import DefinitionPass
from .lexical import LexicalPass
from .traversal import UnitResult, UnitTraversal

# Definitions are always visited before tokens within a unit.
_PASS_ORDER: Tuple[Type[UnitPass], ...] = (DefinitionPass, LexicalPass)


def discover_passes(enabled: Sequence[str] | None = None) -> List[UnitPass]:
    """Return the enabled passes in execution order.

    ``enabled`` only selects passes; listing ``lexical`` before
    ``definitions`` does not change the order they run in.
    """
    if enabled is None:
        return [factory() for factory in _PASS_ORDER]

    wanted = {name.strip().lower() for name in enabled}
    known = {factory.name for factory in _PASS_ORDER}
    unknown = wanted - known
    if unknown:
        raise ValueError(f"Unknown passes requested: {', '.join(sorted(unknown))}")
    return [factory() for factory in _PASS_ORDER if factory.name in wanted]


__all__ = [
    "DefinitionPass",
    "LexicalPass",
    "UnitPass",
    "UnitResult",
    "UnitTraversal",
    "discover_passes",
]

"""Provenance checks for source positions."""

from __future__ import annotations

import os
from typing import Optional

from ..models import SourcePosition
from ..parsing.base import ParsedUnit


def _normalise(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


def is_system_position(position: Optional[SourcePosition]) -> bool:
    """Return True when the parser attributes ``position`` to a system header."""
    return position is not None and position.in_system_header


def is_in_scope(position: Optional[SourcePosition], unit: ParsedUnit) -> bool:
    """Return True when ``position`` lies in the unit's own primary file.

    Positions in system headers and in any other included file, project
    headers among them, are out of scope. So are unresolvable positions.
    The physical file decides when known, so ``#line`` renames do not count.
    """
    if position is None or not position.file:
        return False
    if position.in_system_header:
        return False
    primary = unit.primary_file
    if not primary:
        return False
    physical = position.origin_file or position.file
    return _normalise(physical) == _normalise(primary)


__all__ = ["is_in_scope", "is_system_position"]

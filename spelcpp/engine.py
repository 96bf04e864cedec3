"""Per-unit observation engine."""

from __future__ import annotations

from typing import Callable, Dict

from .models import Observation, ObservationKind, SourcePosition

ObservationSink = Callable[[Observation], None]


class ObservationEngine:
    """Collects observations for one translation unit.

    Definitions are deduplicated by their spelled name: only the first
    occurrence is reported, later ones just bump the count. Comments and
    string literals are reported every time. An engine is never shared
    between units, so the same name is reported once per unit that defines it.
    """

    def __init__(self, sink: ObservationSink) -> None:
        self._sink = sink
        self._identifiers: Dict[str, int] = {}

    def observe_definition(self, text: str, source_file: str, line: int, column: int) -> None:
        """Record a definition site, reporting it on first sight."""
        count = self._identifiers.get(text)
        if count is not None:
            self._identifiers[text] = count + 1
            return
        self._identifiers[text] = 1
        self._emit(ObservationKind.DEFINITION, text, source_file, line, column)

    def observe_string_literal(self, text: str, source_file: str, line: int, column: int) -> None:
        self._emit(ObservationKind.LITERAL, text, source_file, line, column)

    def observe_comment(self, text: str, source_file: str, line: int, column: int) -> None:
        self._emit(ObservationKind.COMMENT, text, source_file, line, column)

    def occurrences(self, text: str) -> int:
        """Return how many times ``text`` was observed as a definition."""
        return self._identifiers.get(text, 0)

    def __len__(self) -> int:
        return len(self._identifiers)

    def _emit(
        self, kind: ObservationKind, text: str, source_file: str, line: int, column: int
    ) -> None:
        position = SourcePosition(file=source_file, line=line, column=column)
        self._sink(Observation(kind=kind, text=text, position=position))


__all__ = ["ObservationEngine", "ObservationSink"]

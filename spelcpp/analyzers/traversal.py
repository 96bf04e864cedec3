"""Per-unit traversal driver."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .base import UnitPass
from .definitions import DefinitionPass
from .lexical import LexicalPass
from ..engine import ObservationEngine, ObservationSink
from ..logging import get_logger
from ..models import Observation, ObservationKind
from ..parsing.base import ParsedUnit


@dataclass
class UnitResult:
    """What one unit's traversal reported."""

    source: str
    counts: Dict[ObservationKind, int] = field(default_factory=dict)
    distinct_definitions: int = 0

    def count(self, kind: ObservationKind) -> int:
        return self.counts.get(kind, 0)


class _CountingSink:
    def __init__(self, sink: ObservationSink) -> None:
        self._sink = sink
        self.counts: Counter[ObservationKind] = Counter()

    def __call__(self, observation: Observation) -> None:
        self.counts[observation.kind] += 1
        self._sink(observation)


class UnitTraversal:
    """Runs the traversal passes over one parsed unit with a fresh engine."""

    def __init__(self, sink: ObservationSink, passes: Optional[Iterable[UnitPass]] = None) -> None:
        self._sink = sink
        self.passes: List[UnitPass] = (
            list(passes) if passes is not None else [DefinitionPass(), LexicalPass()]
        )
        self.logger = get_logger("traversal")

    def process(self, unit: ParsedUnit) -> UnitResult:
        counting = _CountingSink(self._sink)
        engine = ObservationEngine(counting)
        for unit_pass in self.passes:
            if not unit_pass.supports(unit):
                self.logger.debug("Pass %s skipped for %s", unit_pass.name, unit.primary_file)
                continue
            unit_pass.run(unit, engine)
        return UnitResult(
            source=unit.primary_file,
            counts=dict(counting.counts),
            distinct_definitions=len(engine),
        )


__all__ = ["UnitResult", "UnitTraversal"]

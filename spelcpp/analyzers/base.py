"""Base classes for traversal pass plugins."""

from abc import ABC, abstractmethod

from ..engine import ObservationEngine
from ..parsing.base import ParsedUnit


class UnitPass(ABC):
    """Contract for passes that feed a unit's observations to the engine."""

    name: str = ""

    def supports(self, unit: ParsedUnit) -> bool:
        """Return True when this pass should run for the unit."""
        return True

    @abstractmethod
    def run(self, unit: ParsedUnit, engine: ObservationEngine) -> None:
        """Inspect the unit read-only and report findings to ``engine``."""

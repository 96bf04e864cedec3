"""Reporting sinks that consume observations."""

from __future__ import annotations

import json
import sys
from typing import IO, List, Optional

from .config import OUTPUT_FORMATS
from .engine import ObservationSink
from .models import Observation, ObservationKind


class StreamSink:
    """Writes one ``Found ...`` line per observation."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def __call__(self, observation: Observation) -> None:
        self._stream.write(observation.message + "\n")


class JsonLinesSink:
    """Writes one JSON object per observation."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def __call__(self, observation: Observation) -> None:
        self._stream.write(json.dumps(observation.to_dict(), ensure_ascii=False) + "\n")


class CollectingSink:
    """Keeps observations in memory, mostly for tests and embedding."""

    def __init__(self) -> None:
        self.observations: List[Observation] = []

    def __call__(self, observation: Observation) -> None:
        self.observations.append(observation)

    def of_kind(self, kind: ObservationKind) -> List[Observation]:
        return [item for item in self.observations if item.kind is kind]

    @property
    def messages(self) -> List[str]:
        return [item.message for item in self.observations]


def build_sink(output_format: str, stream: Optional[IO[str]] = None) -> ObservationSink:
    """Return the sink for a configured output format."""
    if output_format == "text":
        return StreamSink(stream)
    if output_format == "json":
        return JsonLinesSink(stream)
    raise ValueError(
        f"Unknown output format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
    )


__all__ = ["CollectingSink", "JsonLinesSink", "StreamSink", "build_sink"]

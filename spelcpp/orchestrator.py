"""Runs the traversal over every compile unit of a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .analyzers import UnitPass, UnitResult, UnitTraversal, discover_passes
from .compile_db import load_compile_commands
from .config import SpelcppConfig, load_config
from .engine import ObservationSink
from .logging import get_logger, unit_logger
from .models import CompileUnitTask, ObservationKind
from .parsing import ClangParser, UnitParser
from .sinks import build_sink


@dataclass
class RunSummary:
    """Totals for one run over a project."""

    processed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    totals: Dict[ObservationKind, int] = field(default_factory=dict)

    def add(self, result: UnitResult) -> None:
        self.processed.append(result.source)
        for kind, count in result.counts.items():
            self.totals[kind] = self.totals.get(kind, 0) + count

    def total(self, kind: ObservationKind) -> int:
        return self.totals.get(kind, 0)


class Orchestrator:
    """Processes compile units one at a time, in compile database order."""

    def __init__(
        self,
        config: SpelcppConfig | None = None,
        parser: UnitParser | None = None,
        sink: ObservationSink | None = None,
        passes: Optional[Iterable[UnitPass]] = None,
    ) -> None:
        self.config = config
        self.parser: UnitParser = parser or ClangParser()
        self._sink = sink
        self._pass_overrides = list(passes) if passes is not None else None
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path) -> RunSummary:
        """Analyze every compile unit of the project at ``path``."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")

        config = self.config or load_config(root)
        tasks = load_compile_commands(
            root,
            build_dir=config.build_dir,
            exclude_paths=config.exclude_paths,
            extra_args=config.extra_args,
        )
        self.logger.info("Analyzing %d compile units under %s", len(tasks), root)

        sink = self._sink or build_sink(config.output.format)
        traversal = UnitTraversal(sink, self._select_passes(config))
        return self.run_tasks(tasks, traversal, verbose=config.verbose)

    def run_tasks(
        self,
        tasks: Sequence[CompileUnitTask],
        traversal: UnitTraversal,
        *,
        verbose: bool = False,
    ) -> RunSummary:
        summary = RunSummary()
        for task in tasks:
            result = self.process_unit(task, traversal, verbose=verbose)
            if result is None:
                summary.skipped.append(task.source)
            else:
                summary.add(result)
        self.logger.info(
            "Processed %d units (%d skipped): %d definitions, %d comments, %d literals",
            len(summary.processed),
            len(summary.skipped),
            summary.total(ObservationKind.DEFINITION),
            summary.total(ObservationKind.COMMENT),
            summary.total(ObservationKind.LITERAL),
        )
        return summary

    def process_unit(
        self,
        task: CompileUnitTask,
        traversal: UnitTraversal,
        *,
        verbose: bool = False,
    ) -> Optional[UnitResult]:
        """Parse and traverse one unit; None when the parser rejected it.

        Parser diagnostics are logged at WARNING on verbose runs and at
        DEBUG otherwise, so a log file keeps them either way.
        """
        log = unit_logger(task.source, "orchestrator")
        log.debug("arguments: %s", " ".join(task.arguments))
        with self.parser.open(task) as unit:
            if unit is None:
                log.warning("skipped, parsing failed")
                return None
            level = logging.WARNING if verbose else logging.DEBUG
            for message in unit.diagnostics():
                log.log(level, "%s", message)
            return traversal.process(unit)

    def _select_passes(self, config: SpelcppConfig) -> List[UnitPass]:
        if self._pass_overrides is not None:
            return list(self._pass_overrides)
        enabled = config.passes.enabled or None
        return discover_passes(enabled)


__all__ = ["Orchestrator", "RunSummary"]

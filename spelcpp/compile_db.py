"""Compile database (compile_commands.json) loading."""

from __future__ import annotations

import json
import os
import shlex
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .logging import get_logger
from .models import CompileUnitTask

COMPILE_DB_FILENAME = "compile_commands.json"

_LOGGER = get_logger("compile_db")

# Flags that only matter for producing outputs; the value follows as the next argument.
_DROP_WITH_VALUE = {"-o", "-MF", "-MT", "-MQ"}
_DROP_FLAGS = {"-c", "-MD", "-MMD"}
# Options that share the "-o" prefix but are not an output file.
_NOT_JOINED_OUTPUT = ("-objc", "-offload")


class CompileDatabaseError(FileNotFoundError):
    """Raised when the compile database is missing or unreadable."""


@dataclass
class ExcludeRule:
    """A gitignore-style pattern selecting sources to leave out."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str) -> bool:
        if not self.pattern:
            return False
        if self.directory_only:
            return _matches_directory(rel_path, self.pattern, self.anchored or self.has_slash)
        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _matches_directory(rel_path: str, pattern: str, rooted: bool) -> bool:
    parents = rel_path.split("/")[:-1]
    if rooted:
        prefixes = ["/".join(parents[: index + 1]) for index in range(len(parents))]
        return any(fnmatchcase(prefix, pattern) for prefix in prefixes)
    return any(fnmatchcase(part, pattern) for part in parents)


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def find_compile_database(root: Path, build_dir: Optional[Path] = None) -> Path:
    """Locate compile_commands.json for the project rooted at ``root``."""
    candidates: List[Path] = []
    if build_dir is not None:
        candidates.append(build_dir / COMPILE_DB_FILENAME)
    candidates.append(root / COMPILE_DB_FILENAME)
    candidates.append(root / "build" / COMPILE_DB_FILENAME)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    searched = ", ".join(str(candidate.parent) for candidate in candidates)
    raise CompileDatabaseError(f"No {COMPILE_DB_FILENAME} found (searched: {searched})")


def effective_arguments(
    argv: Sequence[str], source: str, directory: Optional[str] = None
) -> List[str]:
    """Strip the compiler, output-only flags and the source itself from ``argv``.

    Relative paths, including ``source``, are taken relative to ``directory``,
    so ``./src/main.cpp`` and ``src/main.cpp`` name the same source.
    """
    args: List[str] = []
    base = directory or ""
    source_path = os.path.normpath(os.path.join(base, source))
    skip_next = False
    for arg in list(argv)[1:]:
        if skip_next:
            skip_next = False
            continue
        if arg in _DROP_WITH_VALUE:
            skip_next = True
            continue
        if arg in _DROP_FLAGS:
            continue
        if _is_joined_output(arg):
            continue
        if not arg.startswith("-") and os.path.normpath(os.path.join(base, arg)) == source_path:
            continue
        args.append(arg)
    return args


def _is_joined_output(arg: str) -> bool:
    return arg.startswith("-o") and len(arg) > 2 and not arg.startswith(_NOT_JOINED_OUTPUT)


def load_compile_commands(
    root: Path,
    *,
    build_dir: Optional[Path] = None,
    exclude_paths: Sequence[str] = (),
    extra_args: Sequence[str] = (),
) -> List[CompileUnitTask]:
    """Return one task per compile database entry, in database order."""
    root = root.resolve()
    database = find_compile_database(root, build_dir)
    try:
        payload = json.loads(database.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CompileDatabaseError(f"Failed to read {database}: {exc}") from exc
    if not isinstance(payload, list):
        raise CompileDatabaseError(f"{database} must contain a JSON array")

    rules = [rule for rule in (build_exclude_rule(p) for p in exclude_paths) if rule is not None]

    tasks: List[CompileUnitTask] = []
    for position, entry in enumerate(payload):
        task = _task_from_entry(entry, database.parent, extra_args)
        if task is None:
            _LOGGER.debug("Skipping malformed compile database entry #%d", position)
            continue
        if _is_excluded(task.source, root, rules):
            _LOGGER.debug("Excluded %s", task.source)
            continue
        tasks.append(task)
    _LOGGER.debug("Loaded %d compile units from %s", len(tasks), database)
    return tasks


def _task_from_entry(
    entry: Any, default_directory: Path, extra_args: Sequence[str]
) -> Optional[CompileUnitTask]:
    if not isinstance(entry, dict):
        return None
    file_name = entry.get("file")
    if not isinstance(file_name, str) or not file_name:
        return None
    directory = entry.get("directory")
    if not isinstance(directory, str) or not directory:
        directory = str(default_directory)

    argv = _entry_argv(entry)
    if argv is None:
        return None

    source = os.path.normpath(os.path.join(directory, file_name))
    arguments = effective_arguments(argv, file_name, directory)
    arguments.extend(extra_args)
    return CompileUnitTask(source=source, arguments=tuple(arguments), directory=directory)


def _entry_argv(entry: Dict[str, Any]) -> Optional[List[str]]:
    arguments = entry.get("arguments")
    if isinstance(arguments, list) and all(isinstance(arg, str) for arg in arguments):
        return list(arguments)
    command = entry.get("command")
    if isinstance(command, str) and command.strip():
        try:
            return shlex.split(command)
        except ValueError:
            return None
    return None


def _is_excluded(source: str, root: Path, rules: Sequence[ExcludeRule]) -> bool:
    if not rules:
        return False
    try:
        rel_path = Path(source).resolve().relative_to(root).as_posix()
    except ValueError:
        return False
    return any(rule.matches(rel_path) for rule in rules)


__all__ = [
    "COMPILE_DB_FILENAME",
    "CompileDatabaseError",
    "ExcludeRule",
    "build_exclude_rule",
    "effective_arguments",
    "find_compile_database",
    "load_compile_commands",
]

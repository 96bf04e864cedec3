"""CLI entrypoint for spelcpp."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import CONFIG_FILENAME, OUTPUT_FORMATS, ConfigError, SpelcppConfig, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spelcpp",
        description="Spelling checker for C/C++ source code: list definitions, comments and string literals.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity and show per-unit arguments and diagnostics.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (defaults to <path>/.spelcpp.yml).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG diagnostics, including per-unit parser output, to this file.",
    )
    parser.add_argument(
        "--build-dir",
        type=Path,
        default=None,
        help="Directory holding compile_commands.json.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format for observations.",
    )
    parser.add_argument(
        "--extra-arg",
        action="append",
        default=[],
        dest="extra_args",
        metavar="ARG",
        help="Additional compiler argument for every unit, e.g. --extra-arg=-DFOO (repeatable).",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> SpelcppConfig:
    config_path = args.config if args.config is not None else Path(args.path) / CONFIG_FILENAME
    config = load_config(config_path)
    overrides: dict[str, object] = {}
    if args.verbose:
        overrides["verbose"] = True
    if args.log_file is not None:
        overrides["log_file"] = args.log_file.expanduser().resolve()
    if args.build_dir is not None:
        overrides["build_dir"] = args.build_dir.expanduser().resolve()
    if args.extra_args:
        overrides["extra_args"] = [*config.extra_args, *args.extra_args]
    if args.format is not None:
        config.output.format = args.format
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for spelcpp."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=config.verbose, log_file=config.log_file)

    orchestrator = Orchestrator(config)
    try:
        orchestrator.run(args.path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        # CompileDatabaseError is a FileNotFoundError.
        parser.exit(1, f"{exc}\n")
    except ValueError as exc:
        parser.exit(1, f"spelcpp failed: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

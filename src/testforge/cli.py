"""CLI entry point: ``testforge analyze``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from testforge import __version__
from testforge.analysis.pipeline import analyze_sources
from testforge.config import Settings
from testforge.ingestion.loader import collect_sources
from testforge.logging_config import setup_logging


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"testforge {__version__}")
        return

    if args.command == "analyze":
        _run_analyze(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="testforge",
        description=(
            "Static analysis for test generation: "
            "extracts functions and their documented specifications."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    analyze = sub.add_parser(
        "analyze",
        help="Analyze source and documentation files",
    )
    analyze.add_argument(
        "paths",
        nargs="+",
        type=str,
        help="Files or directories (JS/TS sources, .md/.txt docs)",
    )
    analyze.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write JSON result to this file (default: stdout)",
    )
    analyze.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def _run_analyze(args: argparse.Namespace) -> None:
    """Execute the analyze command."""
    settings = Settings()
    verbose = args.verbose or settings.debug_mode
    setup_logging("DEBUG" if verbose else settings.log_level)

    sources = collect_sources(
        [Path(p) for p in args.paths], settings=settings
    )
    if not sources:
        print(
            "Error: no JavaScript/TypeScript or documentation files found",
            file=sys.stderr,
        )
        sys.exit(1)

    result = analyze_sources(sources)
    payload = result.model_dump_json(by_alias=True, indent=2)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)

    for diag in result.diagnostics:
        location = f":{diag.line}" if diag.line else ""
        print(
            f"  [{diag.kind}] {diag.file_name}{location}: {diag.message}",
            file=sys.stderr,
        )
    print(
        f"Done! {len(sources)} files, "
        f"{result.coverage.total_functions} functions, "
        f"{len(result.specifications)} specifications "
        f"({result.coverage.matched_count} functions specified)",
        file=sys.stderr,
    )

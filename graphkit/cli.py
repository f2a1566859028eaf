"""Command-line interface for graphkit."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from graphkit.config import DEFAULT_LIMITS, SizeLimits
from graphkit.io import OPERATIONS, load_document, result_to_dict, run_document
from graphkit.logging import get_logger, set_global_log_level
from graphkit.types.result import GraphkitError

logger = get_logger(__name__)

_HELP = {
    "critical": "Find bridges and articulation points of an undirected graph",
    "shortest-paths": "All-pairs shortest paths (Johnson's algorithm)",
    "max-flow": "Maximum flow between source and sink (Edmonds-Karp)",
    "schedule": "Conflict-free slot assignment (greedy coloring)",
}


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _effective_limits(args: argparse.Namespace) -> Optional[SizeLimits]:
    if args.no_limits:
        return None
    return SizeLimits(
        max_vertices=(
            args.max_vertices
            if args.max_vertices is not None
            else DEFAULT_LIMITS.max_vertices
        ),
        max_edges=(
            args.max_edges if args.max_edges is not None else DEFAULT_LIMITS.max_edges
        ),
    )


def _run_operation(
    operation: str,
    path: Path,
    output: Optional[Path],
    limits: Optional[SizeLimits],
    overrides: Dict[str, Any],
) -> None:
    """Load ``path``, run ``operation`` and print or write the JSON result.

    Exits with status 1 if the file is missing or the operation fails.
    """
    _start_time = perf_counter()
    logger.info(f"Running {operation} on {path}")

    try:
        data = load_document(path)
    except FileNotFoundError:
        logger.error(f"Input file not found: {path}")
        print(f"❌ ERROR: Input file not found: {path}")
        sys.exit(1)
    except GraphkitError as e:
        logger.error(f"Failed to load {path}: {e}")
        print(f"❌ ERROR: Failed to load {path}: {e}")
        sys.exit(1)

    data.update(overrides)
    result = run_document(operation, data, limits=limits)
    payload = result_to_dict(result)
    json_str = json.dumps(payload, indent=2)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json_str + "\n", encoding="utf-8")
        print(f"✅ Results written to: {output}")
    else:
        print(json_str)

    _elapsed = perf_counter() - _start_time
    if not result.ok:
        assert result.error is not None
        logger.error(
            f"{operation} failed after {_format_duration(_elapsed)}: "
            f"{result.error.kind.name}: {result.error.message}"
        )
        if output is not None:
            print(f"❌ ERROR: {result.error.kind.name}: {result.error.message}")
        sys.exit(1)

    logger.info(f"{operation} completed successfully in {_format_duration(_elapsed)}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``graphkit`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="graphkit",
        description="Run graph algorithms on YAML or JSON graph descriptions.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{" + ",".join(OPERATIONS) + "}",
        help="Available commands",
    )

    for operation in OPERATIONS:
        sub = subparsers.add_parser(operation, help=_HELP[operation])
        sub.add_argument("input", type=Path, help="Path to YAML or JSON input")
        sub.add_argument(
            "--output",
            "-o",
            type=Path,
            default=None,
            help="Write the JSON result to this file instead of stdout",
        )
        sub.add_argument(
            "--max-vertices",
            type=int,
            default=None,
            help=f"Reject inputs with more vertices (default: {DEFAULT_LIMITS.max_vertices})",
        )
        sub.add_argument(
            "--max-edges",
            type=int,
            default=None,
            help=f"Reject inputs with more edges (default: {DEFAULT_LIMITS.max_edges})",
        )
        sub.add_argument(
            "--no-limits",
            action="store_true",
            help="Disable input size limits",
        )
        if operation == "critical":
            sub.add_argument(
                "--multigraph",
                action="store_true",
                help="Treat repeated vertex pairs as distinct parallel edges",
            )
        elif operation == "max-flow":
            sub.add_argument("--source", type=int, default=None, help="Source vertex")
            sub.add_argument("--sink", type=int, default=None, help="Sink vertex")
        elif operation == "schedule":
            sub.add_argument(
                "--strategy",
                choices=["sequential", "largest-first"],
                default=None,
                help="Task visiting order (default: sequential)",
            )

    # Determine effective arguments (support both direct calls and module entrypoint)
    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    # Configure logging based on arguments
    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    overrides: Dict[str, Any] = {}
    if getattr(args, "multigraph", False):
        overrides["multigraph"] = True
    for name in ("source", "sink", "strategy"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value

    _run_operation(
        operation=args.command,
        path=args.input,
        output=args.output,
        limits=_effective_limits(args),
        overrides=overrides,
    )


if __name__ == "__main__":
    main()
